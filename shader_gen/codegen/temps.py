"""
Temporary tables.

Temporaries are named, typed expressions hoisted out of an output expression
so they are computed once. Nodes register them in whatever order the tree is
walked; emission must still be valid top-to-bottom, so the table is
linearized with dependencies first, ties broken by registration order.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Set

from ..ir.types import ShaderVarType
from ..errors import DuplicateTemporaryError, TemporaryCycleError


def _name_pattern(name: str):
    # Whole identifier, not a member access such as `.x`
    return re.compile(r'(?<![\w.])' + re.escape(name) + r'(?!\w)')


@dataclass(frozen=True)
class TempInfo:
    type: ShaderVarType = ShaderVarType.INVALID
    body: str = ""

    def references(self, name: str) -> bool:
        return _name_pattern(name).search(self.body) is not None

    def depends_on(self, names: Iterable[str]) -> bool:
        """True if the body references any of `names`."""
        return any(self.references(n) for n in names)


class TempTable:
    """Insertion-ordered name -> TempInfo mapping for one stage."""

    def __init__(self):
        self._temps: Dict[str, TempInfo] = {}

    def add(self, name: str, info: TempInfo):
        """
        Register a temporary.

        Re-registering an identical entry is a no-op so that a shared node
        generated twice in one pass keeps the table unchanged.

        Raises:
            DuplicateTemporaryError: If the name is already bound to a different
                type or body.
        """
        existing = self._temps.get(name)
        if existing is not None:
            if existing == info:
                return
            raise DuplicateTemporaryError(
                f"Temporary '{name}' already defined as {existing.type} '{existing.body}', "
                f"cannot redefine as {info.type} '{info.body}'",
                name=name)
        self._temps[name] = info

    def get(self, name: str) -> Optional[TempInfo]:
        return self._temps.get(name)

    def names(self) -> List[str]:
        return list(self._temps.keys())

    def truncate(self, size: int):
        """Drop every entry registered after the first `size` ones."""
        for name in list(self._temps.keys())[size:]:
            del self._temps[name]

    def __contains__(self, name) -> bool:
        return name in self._temps

    def __len__(self):
        return len(self._temps)

    def __iter__(self):
        return iter(list(self._temps))

    def ordered(self) -> List[str]:
        """
        Return temporary names with every dependency before its users.

        Raises:
            TemporaryCycleError: If temporaries reference each other in a cycle.
        """
        names = self.names()
        deps = {
            name: [other for other in names if other != name and self._temps[name].references(other)]
            for name in names
        }

        resolved: List[str] = []
        seen: Set[str] = set()
        visiting: List[str] = []

        def visit(name: str):
            if name in seen:
                return
            if name in visiting:
                cycle = visiting[visiting.index(name):] + [name]
                raise TemporaryCycleError(
                    f"Temporaries form a cycle: {' -> '.join(cycle)}", names=cycle)
            visiting.append(name)

            # Visit dependencies first
            for dep in deps[name]:
                visit(dep)

            visiting.pop()
            seen.add(name)
            resolved.append(name)

        for name in names:
            visit(name)

        return resolved
