from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .indicator import INDICATOR_KEYS

"""ColumnMap model: semantic role -> column index.

Built once per import by the header resolver. ``None`` marks a role whose
column could not be found; that is not an error.
"""

__all__ = [
    "IDENTIFIER_ROLES",
    "ROLES",
    "ColumnMap",
]

IDENTIFIER_ROLES: tuple[str, ...] = ("site", "time", "year", "month", "day")
ROLES: tuple[str, ...] = IDENTIFIER_ROLES + INDICATOR_KEYS


@dataclass(frozen=True)
class ColumnMap:
    header_row: int
    columns: Mapping[str, int | None] = field(default_factory=dict)

    def __post_init__(self) -> None:
        unknown = set(self.columns) - set(ROLES)
        if unknown:
            raise ValueError(f"unknown roles: {sorted(unknown)}")
        full = {role: self.columns.get(role) for role in ROLES}
        object.__setattr__(self, "columns", MappingProxyType(full))

    def get(self, role: str) -> int | None:
        return self.columns[role]

    def resolved(self, role: str) -> bool:
        return self.columns[role] is not None

    @property
    def indicator_columns(self) -> dict[str, int]:
        """Resolved indicator columns in declaration order."""
        return {k: c for k in INDICATOR_KEYS if (c := self.columns[k]) is not None}

    @property
    def unresolved(self) -> list[str]:
        return [role for role in ROLES if self.columns[role] is None]
