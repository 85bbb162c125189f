from enum import Enum, auto

class ShaderVarType(Enum):
    INVALID = auto()

    # Scalars
    FLOAT = auto()
    INT = auto()
    BOOL = auto()

    # Vectors
    FLOAT2 = auto()
    FLOAT3 = auto()
    FLOAT4 = auto()

    # Matrices
    MAT3 = auto()
    MAT4 = auto()

    # Samplers carry no value, only a texture unit binding
    SAMPLER2D = auto()
    SAMPLER_CUBE = auto()

    @property
    def glsl_name(self) -> str:
        """GLSL spelling of the type (e.g. 'vec3', 'samplerCube')."""
        return _GLSL_NAMES[self]

    def is_vector(self):
        return self in {ShaderVarType.FLOAT2, ShaderVarType.FLOAT3, ShaderVarType.FLOAT4}

    def is_matrix(self):
        return self in {ShaderVarType.MAT3, ShaderVarType.MAT4}

    def is_sampler(self):
        return self in {ShaderVarType.SAMPLER2D, ShaderVarType.SAMPLER_CUBE}

    def component_count(self):
        if self == ShaderVarType.FLOAT2: return 2
        if self == ShaderVarType.FLOAT3: return 3
        if self == ShaderVarType.FLOAT4: return 4
        if self == ShaderVarType.MAT3: return 9
        if self == ShaderVarType.MAT4: return 16
        if self.is_sampler() or self == ShaderVarType.INVALID: return 0
        return 1

    def __str__(self):
        return self.glsl_name


_GLSL_NAMES = {
    ShaderVarType.INVALID: 'void',
    ShaderVarType.FLOAT: 'float',
    ShaderVarType.INT: 'int',
    ShaderVarType.BOOL: 'bool',
    ShaderVarType.FLOAT2: 'vec2',
    ShaderVarType.FLOAT3: 'vec3',
    ShaderVarType.FLOAT4: 'vec4',
    ShaderVarType.MAT3: 'mat3',
    ShaderVarType.MAT4: 'mat4',
    ShaderVarType.SAMPLER2D: 'sampler2D',
    ShaderVarType.SAMPLER_CUBE: 'samplerCube',
}
