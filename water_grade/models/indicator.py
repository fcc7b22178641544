from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

"""Indicator specifications and grade thresholds.

Threshold tables follow the surface water environmental quality standard
(GB 3838-2002) for the seven indicators the classifier understands. Each
monotonic table holds the boundaries of grades I-V in order; a value outside
all five boundaries is "below V".

The declaration order of INDICATORS is significant: it is the evaluation order
of the grading engine and the tie-break order of the exceedance ranking.
"""

__all__ = [
    "GRADE_LABELS",
    "GRADE_III",
    "WORST_GRADE",
    "INDICATORS",
    "INDICATOR_KEYS",
    "PRIORITY_KEYS",
    "IndicatorSpec",
    "Ordering",
    "ThresholdTableError",
    "WaterType",
    "get_indicator",
    "validate_threshold_tables",
]

GRADE_LABELS: tuple[str, ...] = ("I", "II", "III", "IV", "V", "below V")
GRADE_III = 2  # ordinal of Grade III; anything worse is an exceedance
WORST_GRADE = len(GRADE_LABELS) - 1
THRESHOLD_COUNT = 5


class ThresholdTableError(Exception):
    """Raised when a static threshold table is malformed."""


class WaterType(Enum):
    """Water body type. Selects the total phosphorus table."""
    RIVER = "river"
    LAKE = "lake"


class Ordering(Enum):
    """How an indicator value relates to grade severity.

    - ASCENDING: larger value is worse (most pollutants)
    - DESCENDING: smaller value is worse (dissolved oxygen)
    - RANGE: compliant inside a closed interval, otherwise worst (pH)
    """
    ASCENDING = "asc"
    DESCENDING = "desc"
    RANGE = "range"


@dataclass(frozen=True)
class IndicatorSpec:
    """Static description of one measured indicator.

    Exactly one of ``thresholds``, ``per_water_type`` or ``bounds`` is set,
    depending on ``ordering`` and whether the standard differs by water body.
    """
    key: str
    name: str
    ordering: Ordering
    thresholds: tuple[float, ...] | None = None
    per_water_type: Mapping[WaterType, tuple[float, ...]] | None = None
    bounds: tuple[float, float] | None = None  # RANGE only, closed interval
    priority: bool = False  # pH / DO: ranked first, no severity multiple

    def limits(self, water_type: WaterType) -> tuple[float, ...]:
        """Grade I-V boundaries applicable to ``water_type``."""
        if self.per_water_type is not None:
            return self.per_water_type[water_type]
        if self.thresholds is None:
            raise ThresholdTableError(f"indicator '{self.key}' has no threshold table")
        return self.thresholds


INDICATORS: tuple[IndicatorSpec, ...] = (
    IndicatorSpec("ph", "pH", Ordering.RANGE, bounds=(6, 9), priority=True),
    IndicatorSpec(
        "do", "Dissolved oxygen", Ordering.DESCENDING,
        thresholds=(7.5, 6, 5, 3, 2), priority=True,
    ),
    IndicatorSpec("cod_mn", "Permanganate index", Ordering.ASCENDING, thresholds=(2, 4, 6, 10, 15)),
    IndicatorSpec("cod", "COD", Ordering.ASCENDING, thresholds=(15, 15, 20, 30, 40)),
    IndicatorSpec("bod5", "BOD5", Ordering.ASCENDING, thresholds=(3, 3, 4, 6, 10)),
    IndicatorSpec("nh3_n", "Ammonia nitrogen", Ordering.ASCENDING, thresholds=(0.15, 0.5, 1.0, 1.5, 2.0)),
    IndicatorSpec(
        "tp", "Total phosphorus", Ordering.ASCENDING,
        per_water_type=MappingProxyType({
            WaterType.RIVER: (0.02, 0.1, 0.2, 0.3, 0.4),
            WaterType.LAKE: (0.005, 0.025, 0.05, 0.1, 0.2),
        }),
    ),
)

INDICATOR_KEYS: tuple[str, ...] = tuple(spec.key for spec in INDICATORS)
PRIORITY_KEYS: frozenset[str] = frozenset(spec.key for spec in INDICATORS if spec.priority)

_BY_KEY = {spec.key: spec for spec in INDICATORS}


def get_indicator(key: str) -> IndicatorSpec:
    try:
        return _BY_KEY[key]
    except KeyError:
        raise KeyError(f"unknown indicator: {key}") from None


def _check_table(spec: IndicatorSpec, table: tuple[float, ...], label: str) -> None:
    if len(table) != THRESHOLD_COUNT:
        raise ThresholdTableError(
            f"{label}: expected {THRESHOLD_COUNT} thresholds, got {len(table)}"
        )
    pairs = list(zip(table, table[1:]))
    if spec.ordering is Ordering.ASCENDING and any(a > b for a, b in pairs):
        raise ThresholdTableError(f"{label}: thresholds must be non-decreasing: {table}")
    if spec.ordering is Ordering.DESCENDING and any(a < b for a, b in pairs):
        raise ThresholdTableError(f"{label}: thresholds must be non-increasing: {table}")
    # severity multiple divides by the Grade III boundary
    if not spec.priority and table[GRADE_III] <= 0:
        raise ThresholdTableError(f"{label}: Grade III boundary must be positive: {table}")


def validate_threshold_tables(indicators: tuple[IndicatorSpec, ...] = INDICATORS) -> None:
    """Check every indicator table; raise ThresholdTableError on the first defect.

    Guards the severity multiple ``(value - t2) / t2``: with a non-monotonic
    table an exceeded indicator could report a negative multiple.
    """
    for spec in indicators:
        if spec.ordering is Ordering.RANGE:
            if spec.bounds is None or len(spec.bounds) != 2 or spec.bounds[0] > spec.bounds[1]:
                raise ThresholdTableError(f"{spec.key}: invalid range bounds {spec.bounds}")
            continue
        if spec.per_water_type is not None:
            missing = set(WaterType) - set(spec.per_water_type)
            if missing:
                raise ThresholdTableError(
                    f"{spec.key}: missing water types {sorted(w.value for w in missing)}"
                )
            for water_type, table in spec.per_water_type.items():
                _check_table(spec, table, f"{spec.key}[{water_type.value}]")
        elif spec.thresholds is not None:
            _check_table(spec, spec.thresholds, spec.key)
        else:
            raise ThresholdTableError(f"{spec.key}: no threshold table")
