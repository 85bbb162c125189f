# Blend and Fog Nodes
# Handles: affine blending of two terms, linear and exponential fog factors

from typing import Optional

from ..ir.layout import ShaderLayout
from ..ir.types import ShaderVarType
from .base import ShaderNode, member


class ShaderAffineBlend(ShaderNode):
    """Combine n1 and n2, if blend/n1 is not found, only n2 is used."""

    def __init__(self, blend_node: ShaderNode, n1: ShaderNode, n2: ShaderNode):
        self.blend_node = blend_node
        self.n1 = n1
        self.n2 = n2
        self.type = n2.get_type()

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        n2 = self.n2.generate(c, v)
        if n2 is None:
            return c.unsatisfied(self, "base term failed")
        mark = c.checkpoint()
        blend = self.blend_node.generate(c, v)
        n1 = self.n1.generate(c, v) if blend is not None else None
        if n1 is None:
            # Drop whatever the blend weight registered
            c.rollback(mark)
            return n2
        # blend = 0 -> n2, blend = 1 -> n1
        return f"mix({n2}, {n1}, {blend})"

    def children(self):
        return (self.blend_node, self.n1, self.n2)


class ShaderLinearFog(ShaderNode):
    """Fog visibility falling linearly from 1 at `fog_params.x` (start) to 0 at `.y` (end)."""

    def __init__(self, depth_ref: ShaderNode, fog_params: ShaderNode):
        self.depth_ref = depth_ref
        self.fog_params = fog_params
        self.type = ShaderVarType.FLOAT

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        depth = self.depth_ref.generate(c, v)
        if depth is None:
            return c.unsatisfied(self, "no fog depth")
        params = self.fog_params.generate(c, v)
        if params is None:
            return c.unsatisfied(self, "no fog parameters")
        start = member(params, 'x')
        end = member(params, 'y')
        return f"clamp(({end} - {depth}) / ({end} - {start}), 0.0, 1.0)"

    def children(self):
        return (self.depth_ref, self.fog_params)


class ShaderExpFog(ShaderNode):
    """Fog visibility exp(-(density * depth)), or exp(-(density * depth)^2) when squared."""

    def __init__(self, depth_ref: ShaderNode, density_ref: ShaderNode, squared: bool):
        self.depth_ref = depth_ref
        self.density_ref = density_ref
        self.squared = squared
        self.type = ShaderVarType.FLOAT

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        depth = self.depth_ref.generate(c, v)
        if depth is None:
            return c.unsatisfied(self, "no fog depth")
        density = self.density_ref.generate(c, v)
        if density is None:
            return c.unsatisfied(self, "no fog density")
        arg = f"{density} * {depth}"
        if self.squared:
            return f"clamp(exp(-pow({arg}, 2.0)), 0.0, 1.0)"
        return f"clamp(exp(-({arg})), 0.0, 1.0)"

    def children(self):
        return (self.depth_ref, self.density_ref)
