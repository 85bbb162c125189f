# Constant formatting utilities for GLSL code generation

import math

import numpy as np

from ..ir.types import ShaderVarType


def _float(v) -> str:
    """GLSL float literal; always carries a decimal point."""
    f = float(v)
    if not math.isfinite(f):
        raise ValueError(f"GLSL has no literal for {f}")
    s = repr(f)
    if 'e' in s:
        # 1e-09 -> 1.0e-09
        mantissa, exponent = s.split('e')
        if '.' not in mantissa:
            mantissa += '.0'
        return f"{mantissa}e{exponent}"
    return s


def _scalar(value, dtype: ShaderVarType):
    if isinstance(value, (list, tuple)):
        if not value:
            raise ValueError(f"{dtype.glsl_name} constant needs a value")
        return value[0]
    return value


def format_constant(value, dtype: ShaderVarType) -> str:
    """
    Format a constant as a GLSL literal of the given type.

    Strings are taken to be GLSL text already and are returned unchanged.
    Scalars used for a vector type are splatted (`vec3(0.5)`); a 3-component
    value for FLOAT4 gets an alpha of 1.0.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return "0.0"

    if isinstance(value, np.ndarray) or (hasattr(value, '__iter__') and not isinstance(value, (tuple, list))):
        value = tuple(np.asarray(value).flatten().tolist())

    if dtype == ShaderVarType.INT:
        return f"{int(_scalar(value, dtype))}"
    elif dtype == ShaderVarType.BOOL:
        return "true" if _scalar(value, dtype) else "false"
    elif dtype == ShaderVarType.FLOAT:
        return _float(_scalar(value, dtype))

    count = dtype.component_count()
    name = dtype.glsl_name
    if isinstance(value, (list, tuple)):
        values = list(value)
        if dtype == ShaderVarType.FLOAT4 and len(values) == 3:
            # RGB -> RGBA
            values.append(1.0)
        if len(values) < count:
            raise ValueError(f"{name} constant needs {count} components, got {len(values)}")
        return f"{name}({', '.join(_float(v) for v in values[:count])})"
    return f"{name}({_float(value)})"
