# Reference Nodes
# Handles: ivar checks, variable refs with fallbacks, fallback chains, position

from typing import Optional, Sequence

from ..config import MVP_UNIFORM, POSITION_ATTRIBUTE
from ..ir.layout import ShaderLayout, VarInfo, VarStorage
from ..ir.types import ShaderVarType
from .base import ShaderNode, present


def _format_constant(value, dtype: ShaderVarType) -> str:
    from ..codegen.const import format_constant
    return format_constant(value, dtype)


class ShaderIVarCheck(ShaderNode):
    """Check if an ivar is present and non-zero before generating the rest."""

    def __init__(self, name: str, node: ShaderNode):
        self.name = name
        self.node = node
        self.type = node.get_type()

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        if c.get_ivar(self.name, 0) == 0:
            return c.unsatisfied(self, f"ivar '{self.name}' is off")
        return self.node.generate(c, v)

    def children(self):
        return (self.node,)


class ShaderVarRef(ShaderNode):
    """Use a variable if present, else the constant (if one was given)."""

    def __init__(self, name: str, constant_result="", type: ShaderVarType = ShaderVarType.FLOAT4):
        self.name = name
        self.constant_result = constant_result
        self.type = type

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        if c.use_var(v, self.name) is not None:
            return self.name
        if self.constant_result is not None and self.constant_result != "":
            return _format_constant(self.constant_result, self.type)
        return c.unsatisfied(self, f"'{self.name}' not in layout and no constant")

    def __repr__(self):
        return f"ShaderVarRef({self.name!r})"


class ShaderFallbackRef(ShaderNode):
    """Use the first variable that's present, or a constant if none, or nothing if there's no constant."""

    def __init__(self, first: str, second: str, constant_result="",
                 type: ShaderVarType = ShaderVarType.FLOAT4):
        self.first = first
        self.second = second
        self.constant_result = constant_result
        self.type = type

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        for name in (self.first, self.second):
            if c.use_var(v, name) is not None:
                return name
        if self.constant_result is not None and self.constant_result != "":
            return _format_constant(self.constant_result, self.type)
        return c.unsatisfied(self, f"neither '{self.first}' nor '{self.second}' in layout")


class ShaderFallbackNode(ShaderNode):
    """First child that generates wins."""

    def __init__(self, nodes: Sequence[ShaderNode]):
        self.nodes = list(nodes)
        if self.nodes:
            self.type = self.nodes[0].get_type()

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        for node in self.nodes:
            out = node.generate(c, v)
            if out is not None:
                return out
        return c.unsatisfied(self, f"all {len(self.nodes)} alternatives failed")

    def children(self):
        return present(*self.nodes)


class ShaderPosRef(ShaderNode):
    """
    Use the position variable, applying the mvp matrix.

    Position and matrix are always assumed to be bound; when the layout does
    not list them they are declared as a vec4 attribute and a mat4 uniform.
    """

    def __init__(self, position: str = POSITION_ATTRIBUTE, mvp: str = MVP_UNIFORM):
        self.position = position
        self.mvp = mvp

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        pos = c.require_var(v, self.position, VarInfo(ShaderVarType.FLOAT4, VarStorage.ATTRIBUTE))
        c.require_var(v, self.mvp, VarInfo(ShaderVarType.MAT4, VarStorage.UNIFORM))
        if pos.type == ShaderVarType.FLOAT3:
            return f"{self.mvp} * vec4({self.position}, 1.0)"
        return f"{self.mvp} * {self.position}"
