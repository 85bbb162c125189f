from .types import ShaderVarType
from .layout import VarStorage, VarInfo, ShaderLayout, ShaderMaterial

__all__ = ['ShaderVarType', 'VarStorage', 'VarInfo', 'ShaderLayout', 'ShaderMaterial']
