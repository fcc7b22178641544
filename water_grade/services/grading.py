from __future__ import annotations

import math

from ..models.classification import ClassificationResult, ExceededFactor
from ..models.indicator import (
    GRADE_III,
    INDICATORS,
    WORST_GRADE,
    IndicatorSpec,
    Ordering,
    WaterType,
)
from ..models.record import Record

"""Grading engine: per-indicator grades and the worst-indicator overall grade.

Grades are ordinals 0 (Grade I) .. 5 (below V). The overall grade of a record
is the worst grade among its present indicators; every indicator worse than
Grade III is an exceedance factor regardless of which indicator drives the
overall grade.

Factors come back in indicator declaration order; ordering them for display
is water_grade.services.ranking's job.
"""

__all__ = [
    "evaluate_record",
    "grade_indicator",
    "round_half_up",
    "severity_multiple",
]


def round_half_up(value: float) -> int:
    # round() は偶数丸めなので使わない
    return math.floor(value + 0.5)


def grade_indicator(spec: IndicatorSpec, value: float, water_type: WaterType) -> int:
    """Grade ordinal of one present value."""
    if spec.ordering is Ordering.RANGE:
        low, high = spec.bounds  # type: ignore[misc]
        # pH: all-or-nothing, no intermediate grade
        return 0 if low <= round_half_up(value) <= high else WORST_GRADE
    limits = spec.limits(water_type)
    if spec.ordering is Ordering.DESCENDING:
        for grade, limit in enumerate(limits):
            if value >= limit:
                return grade
        return WORST_GRADE
    for grade, limit in enumerate(limits):
        if value <= limit:
            return grade
    return WORST_GRADE


def severity_multiple(spec: IndicatorSpec, value: float, water_type: WaterType) -> float:
    """Fractional overshoot of the Grade III boundary; 0.0 for pH and DO."""
    if spec.priority:
        return 0.0
    boundary = spec.limits(water_type)[GRADE_III]
    return (value - boundary) / boundary


def evaluate_record(record: Record, water_type: WaterType) -> ClassificationResult:
    """Grade a record. Absent indicators are ignored; never raises for a Record."""
    overall = 0
    factors: list[ExceededFactor] = []
    for spec in INDICATORS:
        value = record.value(spec.key)
        if value is None:
            continue
        grade = grade_indicator(spec, value, water_type)
        overall = max(overall, grade)
        if grade > GRADE_III:
            factors.append(
                ExceededFactor(
                    key=spec.key,
                    name=spec.name,
                    multiple=severity_multiple(spec, value, water_type),
                )
            )
    return ClassificationResult(grade=overall, factors=tuple(factors))
