"""
End-to-end tests for ShaderGenerator.

Tests:
- Full source assembly for both stages
- Varying skipping and used-input reporting
- Feature flags, fallbacks and fatal stage failures
- Determinism and sharing one generator across threads
"""

import unittest
from concurrent.futures import ThreadPoolExecutor

import pytest

from shader_gen.codegen.glsl import ShaderGenerator
from shader_gen.config import GeneratorConfig
from shader_gen.defs import ShaderDef
from shader_gen.errors import DefinitionError, StageGenerationError
from shader_gen.ir.layout import ShaderMaterial, VarStorage
from shader_gen.ir.types import ShaderVarType
from shader_gen.nodes import (
    ShaderOp, ShaderPosRef, ShaderSpotlightAtten, ShaderTempRef, ShaderVarRef, ShaderCustom,
)

EXPECTED_FRAGMENT = """precision mediump float;

uniform sampler2D diffuseTex;
uniform vec4 lightColor;
uniform vec3 lightDir;
varying vec3 eyeNormal;
varying vec2 texCoord;

void main() {
    vec3 n = normalize(eyeNormal);
    gl_FragColor = ((max(dot(n, normalize(lightDir)), 0.0) * lightColor) * texture2D(diffuseTex, texCoord));
}
"""

EXPECTED_VERTEX = """attribute vec2 inTexCoord0;
attribute vec3 normal;
attribute vec4 position;
uniform mat4 mvp;
varying vec3 eyeNormal;
varying vec2 texCoord;

void main() {
    gl_Position = mvp * position;
    texCoord = inTexCoord0;
    eyeNormal = normalize(normal);
}
"""


@pytest.fixture
def generator(lit_defs):
    vs, ps = lit_defs
    return ShaderGenerator(vs, ps)


# ============================================================================
# 1. Source assembly
# ============================================================================

def test_textured_material_sources(generator, lit_material):
    pair = generator.generate(lit_material)
    assert pair.fragment_source == EXPECTED_FRAGMENT
    assert pair.vertex_source == EXPECTED_VERTEX


def test_texture_is_reported_as_used(generator, lit_material):
    pair = generator.generate(lit_material)
    assert "diffuseTex" in pair.fragment_inputs
    assert "diffuseTex" in pair.uniforms
    assert set(pair.varyings) == {"texCoord", "eyeNormal"}
    assert set(pair.attributes) == {"position", "normal", "inTexCoord0"}


def test_unused_varying_and_its_inputs_are_skipped(generator, lit_material):
    pair = generator.generate(lit_material)
    assert "unusedDepth" not in pair.vertex_source
    assert "depthScale" not in pair.vertex_inputs
    assert "specularColor" not in pair.uniforms


def test_version_and_precision_config(lit_defs, lit_material):
    vs, ps = lit_defs
    config = GeneratorConfig(glsl_version="100", fragment_precision="highp")
    pair = ShaderGenerator(vs, ps, config).generate(lit_material)
    assert pair.vertex_source.startswith("#version 100\n\n")
    assert pair.fragment_source.startswith("#version 100\nprecision highp float;\n")


# ============================================================================
# 2. Feature availability
# ============================================================================

def test_missing_texture_drops_tex_coords(generator, lit_material):
    lit_material.inputs.remove("diffuseTex")
    pair = generator.generate(lit_material)
    assert "texture2D" not in pair.fragment_source
    assert "texCoord" not in pair.vertex_source
    assert "inTexCoord0" not in pair.vertex_inputs
    assert "gl_FragColor = (max(dot(n, normalize(lightDir)), 0.0) * lightColor);" in pair.fragment_source


def test_constant_color_when_nothing_is_available(generator, bare_material):
    pair = generator.generate(bare_material)
    assert "gl_FragColor = vec4(1.0, 1.0, 1.0, 1.0);" in pair.fragment_source
    assert len(pair.varyings) == 0
    assert "varying" not in pair.vertex_source


def test_specular_flag(generator, lit_material):
    off = generator.generate(lit_material)
    assert "pow(" not in off.fragment_source

    lit_material.set_ivar("enableSpecular", 1)
    on = generator.generate(lit_material)
    assert "pow(max(dot(n, normalize(normalize(lightDir) + normalize(cameraDir))), 0.0), 16.0)" \
        in on.fragment_source
    assert "uniform vec4 specularColor;" in on.fragment_source
    # The normal temporary is shared by both lighting terms
    assert on.fragment_source.count("vec3 n = ") == 1


def test_required_output_failure_is_fatal(lit_material):
    vs = ShaderDef({"gl_Position": ShaderPosRef()})
    ps = ShaderDef({"gl_FragColor": ShaderVarRef("missingColor")})
    with pytest.raises(StageGenerationError) as exc:
        ShaderGenerator(vs, ps).generate(lit_material)
    assert exc.value.stage == "fragment"
    assert exc.value.output == "gl_FragColor"
    assert any("missingColor" in d for d in exc.value.diagnostics)
    assert "missingColor" in exc.value.format_with_diagnostics()


def test_helper_functions_precede_main(lit_material):
    lit_material.add_var("spotParams", ShaderVarType.FLOAT4, value=(0.9, 2.0, 0.0, 0.0))
    lit_material.add_var("spotDir", ShaderVarType.FLOAT3, value=(0.0, 0.0, -1.0))
    vs = ShaderDef({"gl_Position": ShaderPosRef()})
    spot = ShaderSpotlightAtten(ShaderVarRef("lightDir", type=ShaderVarType.FLOAT3),
                                ShaderVarRef("spotParams"), ShaderVarRef("spotDir", type=ShaderVarType.FLOAT3))
    ps = ShaderDef({"gl_FragColor": ShaderOp(ShaderVarRef("lightColor"), spot, "*", True)})
    src = ShaderGenerator(vs, ps).generate(lit_material).fragment_source
    assert src.index("float spotAttenuation(") < src.index("void main()")
    assert "gl_FragColor = (lightColor * spotAttenuation(lightDir, spotParams, spotDir));" in src


def test_temporaries_emitted_in_dependency_order(lit_material):
    l = ShaderTempRef(ShaderVarType.FLOAT3, "l", ShaderCustom("normalize(", ")", ShaderVarRef("lightDir")))
    half = ShaderTempRef(ShaderVarType.FLOAT3, "h", ShaderCustom(
        "normalize(", " + vec3(0.0, 0.0, 1.0))", l))
    vs = ShaderDef({"gl_Position": ShaderPosRef()})
    ps = ShaderDef({"gl_FragColor": ShaderCustom("vec4(", ", 1.0)", ShaderOp(half, l, "+", True))})
    src = ShaderGenerator(vs, ps).generate(lit_material).fragment_source
    assert src.index("vec3 l = normalize(lightDir);") < src.index("vec3 h = normalize(l + vec3(0.0, 0.0, 1.0));")
    assert src.count("vec3 l = ") == 1


# ============================================================================
# 3. Determinism and sharing
# ============================================================================

def test_generation_is_deterministic(lit_defs, lit_material):
    vs, ps = lit_defs
    first = ShaderGenerator(vs, ps).generate(lit_material)
    second = ShaderGenerator(vs, ps).generate(lit_material)
    assert first.vertex_source == second.vertex_source
    assert first.fragment_source == second.fragment_source


def test_generator_shared_across_threads(generator, lit_material):
    plain = ShaderMaterial("Plain")
    plain.add_var("position", ShaderVarType.FLOAT3, storage=VarStorage.ATTRIBUTE)
    materials = [lit_material, plain] * 8
    expected = [generator.generate(m) for m in materials]
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(generator.generate, materials))
    assert [r.fragment_source for r in results] == [e.fragment_source for e in expected]
    assert [r.vertex_source for r in results] == [e.vertex_source for e in expected]


# ============================================================================
# 4. Definition validation
# ============================================================================

class TestDefinitions(unittest.TestCase):
    def test_vertex_needs_position(self):
        vs = ShaderDef({"texCoord": ShaderVarRef("inTexCoord0")})
        ps = ShaderDef({"gl_FragColor": ShaderVarRef("c", "vec4(1.0)")})
        with self.assertRaises(DefinitionError):
            ShaderGenerator(vs, ps)

    def test_fragment_needs_color(self):
        vs = ShaderDef({"gl_Position": ShaderPosRef()})
        with self.assertRaises(DefinitionError):
            ShaderGenerator(vs, ShaderDef({}))

    def test_fragment_outputs_must_be_builtin(self):
        vs = ShaderDef({"gl_Position": ShaderPosRef()})
        ps = ShaderDef({"gl_FragColor": ShaderVarRef("c", "vec4(1.0)"), "extra": ShaderVarRef("c", "1.0")})
        with self.assertRaises(DefinitionError) as ctx:
            ShaderGenerator(vs, ps)
        self.assertEqual(ctx.exception.output, "extra")

    def test_varying_storage(self):
        vs = ShaderDef({"gl_Position": ShaderPosRef(), "uv": ShaderVarRef("inUv", type=ShaderVarType.FLOAT2)})
        ps = ShaderDef({"gl_FragColor": ShaderCustom("vec4(", ", 0.0, 1.0)", ShaderVarRef("uv"))})
        mat = ShaderMaterial()
        mat.add_var("inUv", ShaderVarType.FLOAT2, storage=VarStorage.ATTRIBUTE)
        pair = ShaderGenerator(vs, ps).generate(mat)
        self.assertEqual(pair.varyings.find("uv").type, ShaderVarType.FLOAT2)
        self.assertIn("varying vec2 uv;", pair.vertex_source)
        self.assertIn("gl_FragColor = vec4(uv, 0.0, 1.0);", pair.fragment_source)


if __name__ == "__main__":
    unittest.main()
