"""
Material shader generator.

Builds GLSL vertex/fragment source for a material from two trees of
generator nodes, keeping only the features whose inputs the material
actually provides.

Usage:
    vs = ShaderDef({"gl_Position": ShaderPosRef(), ...})
    ps = ShaderDef({"gl_FragColor": ...})
    pair = ShaderGenerator(vs, ps).generate(material)
"""

from .config import GeneratorConfig, TextureEnvMode
from .logger import setup_logger
from .defs import ShaderDef
from .errors import (
    ShaderGenError, DefinitionError, GenerationError, StageGenerationError,
    DuplicateTemporaryError, TemporaryCycleError, MaterialError,
)
from .ir import ShaderVarType, VarStorage, VarInfo, ShaderLayout, ShaderMaterial
from .codegen import TempInfo, TempTable, ShaderContext, ShaderGenerator, ShaderPair
from .nodes import *  # noqa: F401,F403
from .nodes import __all__ as _node_names

__all__ = [
    'GeneratorConfig', 'TextureEnvMode', 'ShaderDef', 'setup_logger',
    'ShaderGenError', 'DefinitionError', 'GenerationError', 'StageGenerationError',
    'DuplicateTemporaryError', 'TemporaryCycleError', 'MaterialError',
    'ShaderVarType', 'VarStorage', 'VarInfo', 'ShaderLayout', 'ShaderMaterial',
    'TempInfo', 'TempTable', 'ShaderContext', 'ShaderGenerator', 'ShaderPair',
] + list(_node_names)
