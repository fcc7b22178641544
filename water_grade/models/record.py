from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Union

from .column_map import ColumnMap

"""Record model: one monitoring row after extraction."""

__all__ = [
    "MissingReading",
    "Reading",
    "Record",
    "RecordSet",
]


class MissingReading(Enum):
    """An indicator cell that did not yield a usable value.

    Both members mean "absent" to every consumer; they are kept apart so that
    an instrument's invalid-reading flag is never mistaken for a number.
    """
    INVALID_READING = "invalid_reading"  # instrument sentinel -1
    NOT_A_NUMBER = "not_a_number"  # blank / text / NaN


Reading = Union[float, MissingReading]


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class Record:
    """Single monitoring row.

    ``readings`` and ``raw`` only contain indicators whose column was resolved
    in the header; an unresolved indicator is simply absent from both.
    """
    row_index: int  # 0-based grid row
    site: str
    time: str
    readings: Mapping[str, Reading] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict)  # original cells for display

    def __post_init__(self) -> None:
        object.__setattr__(self, "readings", _freeze(self.readings))
        object.__setattr__(self, "raw", _freeze(self.raw))

    def value(self, key: str) -> float | None:
        """Present numeric value of ``key`` or None when absent/missing."""
        reading = self.readings.get(key)
        if reading is None or isinstance(reading, MissingReading):
            return None
        return reading

    def present_values(self) -> dict[str, float]:
        return {k: v for k, v in self.readings.items() if not isinstance(v, MissingReading)}

    @property
    def has_value(self) -> bool:
        return any(not isinstance(v, MissingReading) for v in self.readings.values())


@dataclass(frozen=True)
class RecordSet:
    """Outcome of one import. Replaced as a whole on re-import."""
    header_row: int  # 0-based index of the detected header row
    column_map: ColumnMap
    records: tuple[Record, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)
