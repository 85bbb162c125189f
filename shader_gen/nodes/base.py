import re
from typing import Optional, Tuple

from ..ir.layout import ShaderLayout
from ..ir.types import ShaderVarType

_IDENT = re.compile(r'^[A-Za-z_]\w*$')


def member(expr: str, field: str) -> str:
    """Swizzle/member access that stays correct for compound expressions."""
    if _IDENT.match(expr):
        return f"{expr}.{field}"
    return f"({expr}).{field}"


class ShaderNode:
    """
    Base class for all generator nodes.

    `generate` returns the GLSL fragment for this node, or None when the
    node cannot be expressed with the inputs available in the current stage.
    Variables and temporaries registered by a failing node are rolled back,
    so a dropped branch never shows up in the emitted source.
    """
    type: ShaderVarType = ShaderVarType.FLOAT4

    def generate(self, c, v: ShaderLayout) -> Optional[str]:
        mark = c.checkpoint()
        out = self._generate(c, v)
        if out is None:
            c.rollback(mark)
        return out

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        return c.unsatisfied(self, "no generator")

    def get_type(self) -> ShaderVarType:
        return self.type

    def children(self) -> Tuple['ShaderNode', ...]:
        """Direct child nodes, used to validate the definition graph."""
        return ()

    def __repr__(self):
        return f"{type(self).__name__}()"


def present(*nodes) -> Tuple[ShaderNode, ...]:
    return tuple(n for n in nodes if n is not None)
