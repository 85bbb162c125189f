"""
Pytest configuration and shared fixtures for shader generator tests.

This file provides:
1. Materials with common variable sets
2. A context factory for single-node tests
3. A vertex/fragment definition pair for a textured, lit material

Usage:
    pytest tests/ -v
"""

import os
import sys

import pytest

# Allow running from a source checkout without installing
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from shader_gen.codegen.shader_context import ShaderContext
from shader_gen.defs import ShaderDef
from shader_gen.ir.layout import ShaderMaterial, VarStorage
from shader_gen.ir.types import ShaderVarType
from shader_gen.nodes import (
    ShaderFallbackNode, ShaderIVarCheck, ShaderLighter, ShaderPosRef, ShaderSpecLighter,
    ShaderTempRef, ShaderTexRef, ShaderVarRef, ShaderCustom, ShaderAdditiveCombiner,
)


# =============================================================================
# MATERIALS
# =============================================================================

@pytest.fixture
def bare_material():
    """Only what ShaderPosRef needs."""
    mat = ShaderMaterial("Bare")
    mat.add_var("position", ShaderVarType.FLOAT4, storage=VarStorage.ATTRIBUTE)
    mat.add_var("mvp", ShaderVarType.MAT4, value=[1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1, 0, 0, 0, 0, 1])
    return mat


@pytest.fixture
def lit_material(bare_material):
    """
    Textured, lit material.

    Attributes: position, normal, inTexCoord0
    Uniforms: mvp, diffuseTex, lightDir, lightColor, specularColor, cameraDir, depthScale
    """
    mat = bare_material
    mat.name = "Lit"
    mat.add_var("normal", ShaderVarType.FLOAT3, storage=VarStorage.ATTRIBUTE)
    mat.add_var("inTexCoord0", ShaderVarType.FLOAT2, storage=VarStorage.ATTRIBUTE)
    mat.add_var("diffuseTex", ShaderVarType.SAMPLER2D)
    mat.add_var("lightDir", ShaderVarType.FLOAT3, value=(0.0, 0.0, 1.0))
    mat.add_var("lightColor", ShaderVarType.FLOAT4, value=(1.0, 1.0, 1.0, 1.0))
    mat.add_var("specularColor", ShaderVarType.FLOAT4, value=(0.5, 0.5, 0.5, 1.0))
    mat.add_var("cameraDir", ShaderVarType.FLOAT3, value=(0.0, 0.0, 1.0))
    mat.add_var("depthScale", ShaderVarType.FLOAT, value=0.5)
    return mat


# =============================================================================
# CONTEXTS
# =============================================================================

@pytest.fixture
def make_context():
    """
    Factory for ShaderContext.

    Example:
        def test_something(make_context):
            c = make_context(ivars={"enableSpecular": 1})
    """
    def factory(ivars=None, vertex_stage=False, material=None):
        mat = material or ShaderMaterial("Test")
        for name, value in (ivars or {}).items():
            mat.set_ivar(name, value)
        return ShaderContext(mat, vertex_stage)
    return factory


@pytest.fixture
def ctx(make_context):
    return make_context()


# =============================================================================
# DEFINITIONS
# =============================================================================

@pytest.fixture
def lit_defs():
    """
    Vertex/fragment definitions for a textured material with an optional
    specular highlight.

    Varyings: texCoord (vec2), eyeNormal (vec3), unusedDepth (float)
    """
    vs = ShaderDef({
        "gl_Position": ShaderPosRef(),
        "texCoord": ShaderVarRef("inTexCoord0", type=ShaderVarType.FLOAT2),
        "eyeNormal": ShaderCustom("normalize(", ")", ShaderVarRef("normal", type=ShaderVarType.FLOAT3),
                                  type=ShaderVarType.FLOAT3),
        "unusedDepth": ShaderCustom("", " * 2.0", ShaderVarRef("depthScale", type=ShaderVarType.FLOAT),
                                    type=ShaderVarType.FLOAT),
    })

    normal = ShaderTempRef(ShaderVarType.FLOAT3, "n", ShaderCustom(
        "normalize(", ")", ShaderVarRef("eyeNormal", type=ShaderVarType.FLOAT3), type=ShaderVarType.FLOAT3))
    light_dir = ShaderVarRef("lightDir", type=ShaderVarType.FLOAT3)
    diffuse = ShaderLighter(light_dir, normal, ShaderVarRef("lightColor"))
    specular = ShaderIVarCheck("enableSpecular", ShaderSpecLighter(
        light_dir, ShaderVarRef("cameraDir", type=ShaderVarType.FLOAT3), normal,
        ShaderVarRef("specularColor")))
    lighting = ShaderAdditiveCombiner([diffuse, specular])

    color = ShaderFallbackNode([
        ShaderTexRef("diffuseTex", ShaderVarRef("texCoord", type=ShaderVarType.FLOAT2), "diffuseMode", lighting),
        lighting,
        ShaderVarRef("constantColor", (1.0, 1.0, 1.0, 1.0)),
    ])
    ps = ShaderDef({"gl_FragColor": color})
    return vs, ps
