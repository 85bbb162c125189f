"""
Variable layouts and material descriptors.

A ShaderLayout is the lookup table nodes query to decide whether an input is
available for the stage being generated. A ShaderMaterial bundles the layout of
everything the material provides (attributes and uniforms, with their values)
together with the integer feature flags ("ivars") that switch optional parts of
a generator tree on or off.
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

import numpy as np

from .types import ShaderVarType
from ..errors import MaterialError


class VarStorage(Enum):
    ATTRIBUTE = auto()  # Per-vertex input, vertex stage only
    UNIFORM = auto()    # Visible to both stages
    VARYING = auto()    # Produced by the vertex stage, consumed by the fragment stage

    @property
    def qualifier(self) -> str:
        return self.name.lower()


@dataclass
class VarInfo:
    """Type and storage class of a named shader variable."""
    type: ShaderVarType
    storage: VarStorage = VarStorage.UNIFORM
    # Value to upload for uniforms/attributes, None for varyings and samplers
    value: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    def declaration(self, name: str) -> str:
        return f"{self.storage.qualifier} {self.type.glsl_name} {name};"


class ShaderLayout:
    """
    Ordered name -> VarInfo table.

    Nodes only read from the layout of the stage they generate for; the
    generator writes a separate layout per stage to report which variables
    were actually consumed.
    """
    def __init__(self, variables: Optional[Dict[str, VarInfo]] = None):
        self._vars: Dict[str, VarInfo] = dict(variables or {})

    def add(self, name: str, info: VarInfo) -> VarInfo:
        self._vars[name] = info
        return info

    def find(self, name: str) -> Optional[VarInfo]:
        if not name:
            return None
        return self._vars.get(name)

    def remove(self, name: str):
        self._vars.pop(name, None)

    def names(self):
        return list(self._vars.keys())

    def items(self) -> Iterator[Tuple[str, VarInfo]]:
        return iter(list(self._vars.items()))

    def filtered(self, storage: VarStorage) -> 'ShaderLayout':
        """Return a new layout holding only the variables with the given storage."""
        return ShaderLayout({n: i for n, i in self._vars.items() if i.storage == storage})

    def merged(self, other: 'ShaderLayout') -> 'ShaderLayout':
        """Return a new layout with `other` layered over this one."""
        res = ShaderLayout(self._vars)
        for name, info in other.items():
            res.add(name, info)
        return res

    def __contains__(self, name) -> bool:
        return name in self._vars

    def __iter__(self):
        return iter(list(self._vars))

    def __len__(self):
        return len(self._vars)

    def __eq__(self, other):
        if not isinstance(other, ShaderLayout):
            return NotImplemented
        return list(self._vars.items()) == list(other._vars.items())

    def __repr__(self):
        inner = ", ".join(f"{n}: {i.storage.qualifier} {i.type}" for n, i in self._vars.items())
        return f"ShaderLayout({inner})"


class ShaderMaterial:
    """
    Read-only inputs for one generation: the variables a material provides and
    its integer feature flags.
    """
    def __init__(self, name: str = "material"):
        self.name = name
        self.inputs = ShaderLayout()
        self.ivars: Dict[str, int] = {}

    def add_var(self, name: str, type: ShaderVarType, value=None,
                storage: VarStorage = VarStorage.UNIFORM) -> VarInfo:
        """
        Register a material variable.

        Args:
            name: Variable name as referenced by the generator tree
            type: Shader type of the variable
            value: Optional numeric value (scalar, sequence or array)
            storage: ATTRIBUTE or UNIFORM

        Raises:
            MaterialError: If the value does not match the type's component count
                or the storage class is VARYING.
        """
        if storage == VarStorage.VARYING:
            raise MaterialError(f"Material variable '{name}' cannot be a varying", name=name)
        arr = None
        if value is not None:
            if type.is_sampler():
                raise MaterialError(f"Sampler '{name}' takes no value", name=name)
            arr = np.asarray(value, dtype=np.float32).flatten()
            expected = type.component_count()
            if arr.size != expected:
                raise MaterialError(
                    f"Variable '{name}' of type {type} expects {expected} components, got {arr.size}",
                    name=name)
        return self.inputs.add(name, VarInfo(type, storage, arr))

    def set_ivar(self, name: str, value: int):
        self.ivars[name] = int(value)

    def get_ivar(self, name: str, default: int = 0) -> int:
        return self.ivars.get(name, default)

    @property
    def uniforms(self) -> ShaderLayout:
        return self.inputs.filtered(VarStorage.UNIFORM)

    @property
    def attributes(self) -> ShaderLayout:
        return self.inputs.filtered(VarStorage.ATTRIBUTE)
