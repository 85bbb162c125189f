import logging
from typing import List, Optional, Tuple

from ..ir.layout import ShaderLayout, ShaderMaterial, VarInfo
from ..ir.types import ShaderVarType
from .temps import TempInfo, TempTable

logger = logging.getLogger(__name__)

# (used vars, temp vals, temp funcs) sizes at a point in the traversal
Checkpoint = Tuple[int, int, int]


class ShaderContext:
    """
    Context object passed to generator nodes.
    Holds the scratch state for generating ONE stage of ONE material: the
    stage flag, the temporary tables, which layout variables were consumed
    and why nodes failed. A fresh context is created for every stage pass.
    """
    def __init__(self, material: Optional[ShaderMaterial], vertex_stage: bool):
        self.material = material
        self.vertex_stage = vertex_stage
        self.temp_vals = TempTable()
        self.temp_funcs = TempTable()
        self.used = ShaderLayout()
        self.diagnostics: List[str] = []

    @property
    def stage(self) -> str:
        return "vertex" if self.vertex_stage else "fragment"

    def get_ivar(self, name: str, default: int = 0) -> int:
        """Feature flag lookup on the material, `default` when absent."""
        if not name or self.material is None:
            return default
        return self.material.get_ivar(name, default)

    def use_var(self, v: ShaderLayout, name: str) -> Optional[VarInfo]:
        """Look up `name` in the stage layout and record it as consumed if present."""
        info = v.find(name)
        if info is not None and name not in self.used:
            self.used.add(name, info)
        return info

    def require_var(self, v: ShaderLayout, name: str, default: VarInfo) -> VarInfo:
        """Like use_var, but an absent variable is assumed to exist as `default`."""
        info = self.use_var(v, name)
        if info is None:
            info = default
            if name not in self.used:
                self.used.add(name, info)
        return info

    # NOTE: identical re-registration is a no-op, anything else raises.
    def add_temp_val(self, type: ShaderVarType, name: str, body: str) -> str:
        self.temp_vals.add(name, TempInfo(type, body))
        return name

    def add_unique_temp_val(self, v: ShaderLayout, type: ShaderVarType, name: str, body: str) -> str:
        """
        Register a value temporary under `name`, or `name1`, `name2`, ... when
        `name` is taken by a stage variable or by a temporary with another body.
        Returns the name actually used.
        """
        info = TempInfo(type, body)
        candidate = name
        n = 0
        while (v.find(candidate) is not None or candidate in self.used
               or (candidate in self.temp_vals and self.temp_vals.get(candidate) != info)):
            n += 1
            candidate = f"{name}{n}"
        self.temp_vals.add(candidate, info)
        return candidate

    def add_temp_func(self, type: ShaderVarType, name: str, body: str) -> str:
        self.temp_funcs.add(name, TempInfo(type, body))
        return name

    def unsatisfied(self, node, reason: str) -> None:
        """Record why `node` cannot generate and return the failure value (None)."""
        msg = f"[{self.stage}] {type(node).__name__}: {reason}"
        self.diagnostics.append(msg)
        logger.debug(msg)
        return None

    def checkpoint(self) -> Checkpoint:
        return (len(self.used), len(self.temp_vals), len(self.temp_funcs))

    def rollback(self, mark: Checkpoint):
        """Forget variables and temporaries registered since `mark`."""
        used, vals, funcs = mark
        for name in self.used.names()[used:]:
            self.used.remove(name)
        self.temp_vals.truncate(vals)
        self.temp_funcs.truncate(funcs)

    def ordered_temp_vals(self, indent: str = "    ") -> List[str]:
        """Value temporary declarations, dependencies first."""
        lines = []
        for name in self.temp_vals.ordered():
            info = self.temp_vals.get(name)
            lines.append(f"{indent}{info.type.glsl_name} {name} = {info.body};")
        return lines

    def ordered_temp_funcs(self) -> List[str]:
        """Helper function definitions, callees first."""
        return [self.temp_funcs.get(name).body for name in self.temp_funcs.ordered()]
