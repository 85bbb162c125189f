# GLSL Code Generation Package

from .temps import TempInfo, TempTable
from .shader_context import ShaderContext
from .glsl import ShaderGenerator, ShaderPair
from .const import format_constant

__all__ = ['TempInfo', 'TempTable', 'ShaderContext', 'ShaderGenerator', 'ShaderPair', 'format_constant']
