# Generator Nodes Package
# One class per node kind; every node implements _generate(c, v)

from .base import ShaderNode
from .refs import ShaderIVarCheck, ShaderVarRef, ShaderFallbackRef, ShaderFallbackNode, ShaderPosRef
from .textures import ShaderTexRef, ShaderCubeRef, ShaderSpecularTex
from .combiners import ShaderAdditiveCombiner, ShaderOp, ShaderTempRef, ShaderCustom
from .lighting import ShaderAttenuator, ShaderLighter, ShaderSpecLighter, ShaderSpotlightAtten, ShaderReflNode
from .blend import ShaderAffineBlend, ShaderLinearFog, ShaderExpFog

__all__ = [
    'ShaderNode',
    'ShaderIVarCheck', 'ShaderVarRef', 'ShaderFallbackRef', 'ShaderFallbackNode', 'ShaderPosRef',
    'ShaderTexRef', 'ShaderCubeRef', 'ShaderSpecularTex',
    'ShaderAdditiveCombiner', 'ShaderOp', 'ShaderTempRef', 'ShaderCustom',
    'ShaderAttenuator', 'ShaderLighter', 'ShaderSpecLighter', 'ShaderSpotlightAtten', 'ShaderReflNode',
    'ShaderAffineBlend', 'ShaderLinearFog', 'ShaderExpFog',
]
