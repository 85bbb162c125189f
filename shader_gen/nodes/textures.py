# Texture Nodes
# Handles: 2D texture lookups with env-mode chaining, cube maps, specular maps

from typing import Optional

from ..config import DEFAULT_TEXTURE_MODE, TextureEnvMode
from ..ir.layout import ShaderLayout
from ..ir.types import ShaderVarType
from .base import ShaderNode, member, present


class ShaderTexRef(ShaderNode):
    """
    Texture lookup node.

    The UV child and the texture variable are both required. When a `next`
    node generates, the lookup is combined with it according to the texture
    env mode read from the `mode_var` ivar (MODULATE when unset).
    """

    def __init__(self, tex: str, uv_ref: ShaderNode, mode: str = "", next_ref: Optional[ShaderNode] = None):
        self.tex_var = tex
        self.mode_var = mode
        self.uv_ref = uv_ref
        self.next_ref = next_ref

    def gen_tex_lookup(self, tex_var: str, uv: str, c, v: ShaderLayout) -> str:
        return f"texture2D({tex_var}, {uv})"

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        uv = self.uv_ref.generate(c, v)
        if uv is None:
            return c.unsatisfied(self, f"no texture coordinates for '{self.tex_var}'")
        if c.use_var(v, self.tex_var) is None:
            return c.unsatisfied(self, f"texture '{self.tex_var}' not in layout")

        lookup = self.gen_tex_lookup(self.tex_var, uv, c, v)
        if self.next_ref is None:
            return lookup
        prev = self.next_ref.generate(c, v)
        if prev is None:
            return lookup

        mode = c.get_ivar(self.mode_var, DEFAULT_TEXTURE_MODE) if self.mode_var else DEFAULT_TEXTURE_MODE
        if mode == TextureEnvMode.REPLACE:
            return lookup
        if mode == TextureEnvMode.DECAL:
            # Lookup is referenced three times, hoist it
            tex = c.add_unique_temp_val(v, ShaderVarType.FLOAT4, f"{self.tex_var}Color", lookup)
            return f"vec4(mix({member(prev, 'rgb')}, {tex}.rgb, {tex}.a), {member(prev, 'a')})"
        return f"({prev} * {lookup})"

    def children(self):
        return present(self.uv_ref, self.next_ref)

    def __repr__(self):
        return f"{type(self).__name__}({self.tex_var!r})"


class ShaderCubeRef(ShaderTexRef):
    """Cube map lookup node; the reflection alpha (if any) replaces the lookup alpha."""

    def __init__(self, tex: str, uv_ref: ShaderNode, mode: str = "",
                 refl_alpha_node: Optional[ShaderNode] = None, next_ref: Optional[ShaderNode] = None):
        super().__init__(tex, uv_ref, mode, next_ref)
        self.refl_alpha_node = refl_alpha_node

    def gen_tex_lookup(self, tex_var: str, uv: str, c, v: ShaderLayout) -> str:
        lookup = f"textureCube({tex_var}, {uv})"
        if self.refl_alpha_node is None:
            return lookup
        alpha = self.refl_alpha_node.generate(c, v)
        if alpha is None:
            return lookup
        return f"vec4({lookup}.rgb, {alpha})"

    def children(self):
        return present(self.uv_ref, self.refl_alpha_node, self.next_ref)


class ShaderSpecularTex(ShaderNode):
    """Specular map lookup; modulates the rgb of the chained `next` term, keeping its alpha."""

    def __init__(self, tex: str, uv_ref: ShaderNode, next_ref: Optional[ShaderNode] = None):
        self.tex_var = tex
        self.uv_ref = uv_ref
        self.next_ref = next_ref

    def _generate(self, c, v: ShaderLayout) -> Optional[str]:
        uv = self.uv_ref.generate(c, v)
        if uv is None:
            return c.unsatisfied(self, f"no texture coordinates for '{self.tex_var}'")
        if c.use_var(v, self.tex_var) is None:
            return c.unsatisfied(self, f"specular texture '{self.tex_var}' not in layout")

        lookup = f"texture2D({self.tex_var}, {uv})"
        if self.next_ref is None:
            return lookup
        prev = self.next_ref.generate(c, v)
        if prev is None:
            return lookup
        return f"({prev} * vec4({lookup}.rgb, 1.0))"

    def children(self):
        return present(self.uv_ref, self.next_ref)

    def __repr__(self):
        return f"ShaderSpecularTex({self.tex_var!r})"
