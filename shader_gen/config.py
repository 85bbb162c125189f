"""
Generator defaults.

Names here are the conventions shared between generator trees and the
runtime that binds the generated program: builtin outputs, the position
attribute and the model-view-projection uniform.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import FrozenSet, Optional


# Builtin outputs are assigned directly and are never declared as varyings
POSITION_OUTPUT = "gl_Position"
COLOR_OUTPUT = "gl_FragColor"
POINT_SIZE_OUTPUT = "gl_PointSize"
BUILTIN_OUTPUTS = frozenset({POSITION_OUTPUT, COLOR_OUTPUT, POINT_SIZE_OUTPUT})

# Inputs ShaderPosRef assumes are always present
POSITION_ATTRIBUTE = "position"
MVP_UNIFORM = "mvp"

# Exponent used by ShaderSpecLighter when no shininess input is available
DEFAULT_SHININESS = "16.0"


class TextureEnvMode(IntEnum):
    """How a texture lookup combines with the texture chained after it (GLKit values)."""
    REPLACE = 0
    MODULATE = 1
    DECAL = 2


DEFAULT_TEXTURE_MODE = TextureEnvMode.MODULATE


@dataclass(frozen=True)
class GeneratorConfig:
    """
    Output formatting for ShaderGenerator.

    The defaults target GLSL ES 1.00: no #version line and a mediump default
    float precision in the fragment stage.
    """
    glsl_version: Optional[str] = None
    fragment_precision: Optional[str] = "mediump"
    indent: str = "    "
    builtin_outputs: FrozenSet[str] = field(default=BUILTIN_OUTPUTS)
    position_output: str = POSITION_OUTPUT
    color_output: str = COLOR_OUTPUT


DEFAULT_CONFIG = GeneratorConfig()
