# Lighting Nodes
# Handles: distance attenuation, diffuse/specular terms, spotlights, reflection vectors

from typing import Optional

from ..config import DEFAULT_SHININESS
from ..ir.layout import ShaderLayout
from ..ir.types import ShaderVarType
from .base import ShaderNode, present

SPOT_FUNC = "spotAttenuation"
SPOT_FUNC_BODY = f"""float {SPOT_FUNC}(vec3 toLight, vec4 params, vec3 spotDir) {{
    float d = dot(normalize(-toLight), normalize(spotDir));
    return d < params.x ? 0.0 : pow(d, params.y);
}}"""


class ShaderAttenuator(ShaderNode):
    """
    Distance attenuation: 1 / (k0 + k1 * d + k2 * d^2) with d = |toLight|.

    `atten` supplies (k0, k1, k2) as a vec3. Both children are required.
    """

    def __init__(self, to_light: ShaderNode, atten: ShaderNode):
        self.to_light = to_light
        self.atten = atten
        self.type = ShaderVarType.FLOAT

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        to_light = self.to_light.generate(c, v)
        if to_light is None:
            return c.unsatisfied(self, "no light vector")
        atten = self.atten.generate(c, v)
        if atten is None:
            return c.unsatisfied(self, "no attenuation factors")
        return (f"(1.0 / dot({atten}, vec3(1.0, length({to_light}), "
                f"dot({to_light}, {to_light}))))")

    def children(self):
        return (self.to_light, self.atten)


class ShaderLighter(ShaderNode):
    """Lambert diffuse term: max(N.L, 0) * color [* atten]. Attenuation is optional."""

    def __init__(self, light_dir: ShaderNode, normal: ShaderNode, color: ShaderNode,
                 atten: Optional[ShaderNode] = None):
        self.light_dir = light_dir
        self.normal = normal
        self.color = color
        self.atten = atten

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        light_dir = self.light_dir.generate(c, v)
        if light_dir is None:
            return c.unsatisfied(self, "no light direction")
        normal = self.normal.generate(c, v)
        if normal is None:
            return c.unsatisfied(self, "no normal")
        color = self.color.generate(c, v)
        if color is None:
            return c.unsatisfied(self, "no light color")

        out = f"max(dot({normal}, normalize({light_dir})), 0.0) * {color}"
        atten = self.atten.generate(c, v) if self.atten is not None else None
        if atten is not None:
            out += f" * {atten}"
        return f"({out})"

    def children(self):
        return present(self.light_dir, self.normal, self.color, self.atten)


class ShaderSpecLighter(ShaderNode):
    """
    Blinn-Phong specular term: max(N.H, 0)^shininess * color [* atten].

    Attenuation is optional; shininess falls back to DEFAULT_SHININESS.
    """

    def __init__(self, light_dir: ShaderNode, camera_dir: ShaderNode, normal: ShaderNode,
                 color: ShaderNode, atten: Optional[ShaderNode] = None,
                 shininess: Optional[ShaderNode] = None):
        self.light_dir = light_dir
        self.camera_dir = camera_dir
        self.normal = normal
        self.color = color
        self.atten = atten
        self.shininess = shininess

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        light_dir = self.light_dir.generate(c, v)
        if light_dir is None:
            return c.unsatisfied(self, "no light direction")
        camera_dir = self.camera_dir.generate(c, v)
        if camera_dir is None:
            return c.unsatisfied(self, "no camera direction")
        normal = self.normal.generate(c, v)
        if normal is None:
            return c.unsatisfied(self, "no normal")
        color = self.color.generate(c, v)
        if color is None:
            return c.unsatisfied(self, "no specular color")

        shininess = self.shininess.generate(c, v) if self.shininess is not None else None
        if shininess is None:
            shininess = DEFAULT_SHININESS

        half = f"normalize(normalize({light_dir}) + normalize({camera_dir}))"
        out = f"pow(max(dot({normal}, {half}), 0.0), {shininess}) * {color}"
        atten = self.atten.generate(c, v) if self.atten is not None else None
        if atten is not None:
            out += f" * {atten}"
        return f"({out})"

    def children(self):
        return present(self.light_dir, self.camera_dir, self.normal, self.color,
                       self.atten, self.shininess)


class ShaderSpotlightAtten(ShaderNode):
    """
    Spotlight cone factor. `params.x` is the cosine of the cutoff angle,
    `params.y` the falloff exponent. All children are required.
    """

    def __init__(self, light_dir: ShaderNode, params: ShaderNode, dir: ShaderNode):
        self.light_dir = light_dir
        self.params = params
        self.dir = dir
        self.type = ShaderVarType.FLOAT

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        light_dir = self.light_dir.generate(c, v)
        if light_dir is None:
            return c.unsatisfied(self, "no light vector")
        params = self.params.generate(c, v)
        if params is None:
            return c.unsatisfied(self, "no spotlight parameters")
        spot_dir = self.dir.generate(c, v)
        if spot_dir is None:
            return c.unsatisfied(self, "no spotlight direction")

        func = c.add_temp_func(ShaderVarType.FLOAT, SPOT_FUNC, SPOT_FUNC_BODY)
        return f"{func}({light_dir}, {params}, {spot_dir})"

    def children(self):
        return (self.light_dir, self.params, self.dir)


class ShaderReflNode(ShaderNode):
    """Reflect `src` about `norm`; both are required."""

    def __init__(self, norm: ShaderNode, src: ShaderNode):
        self.norm = norm
        self.src = src
        self.type = ShaderVarType.FLOAT3

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        norm = self.norm.generate(c, v)
        if norm is None:
            return c.unsatisfied(self, "no normal")
        src = self.src.generate(c, v)
        if src is None:
            return c.unsatisfied(self, "no incident vector")
        return f"reflect({src}, {norm})"

    def children(self):
        return (self.norm, self.src)
