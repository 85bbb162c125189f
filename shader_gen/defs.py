"""
Shader definitions.

A ShaderDef maps each output of one stage (a builtin such as gl_Position or
a varying name) to the root of the generator tree that computes it. Trees
are immutable once built and may be shared by any number of generators and
threads; sub-trees may be shared between outputs (a DAG), cycles are
rejected.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Set

from .errors import DefinitionError
from .nodes.base import ShaderNode


class ShaderDef:
    def __init__(self, definition: Mapping[str, ShaderNode]):
        self._def: Dict[str, ShaderNode] = dict(definition)
        for name, node in self._def.items():
            if not isinstance(node, ShaderNode):
                raise DefinitionError(f"Output '{name}' is not a ShaderNode: {node!r}", output=name)
            _check_acyclic(name, node)

    def get_def(self) -> Mapping[str, ShaderNode]:
        return MappingProxyType(self._def)

    def items(self):
        return self._def.items()

    def __getitem__(self, name: str) -> ShaderNode:
        return self._def[name]

    def __contains__(self, name) -> bool:
        return name in self._def

    def __iter__(self):
        return iter(self._def)

    def __len__(self):
        return len(self._def)

    # No copy: the nodes are shared by identity
    def __copy__(self):
        raise TypeError("ShaderDef cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("ShaderDef cannot be copied")

    def __repr__(self):
        return f"ShaderDef({', '.join(self._def)})"


def _check_acyclic(output: str, root: ShaderNode):
    done: Set[int] = set()
    path: Set[int] = set()

    def visit(node: ShaderNode):
        if id(node) in done:
            return
        if id(node) in path:
            raise DefinitionError(f"Output '{output}' has a cycle through {node!r}", output=output)
        path.add(id(node))
        for child in node.children():
            visit(child)
        path.discard(id(node))
        done.add(id(node))

    visit(root)
