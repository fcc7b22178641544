from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from ..models.classification import ClassificationResult, ExceededFactor
from ..models.indicator import INDICATOR_KEYS, WaterType
from ..models.record import Record
from .grading import evaluate_record

"""Exceedance ranking and the shared factor formatting.

pH and dissolved oxygen always lead (their multiples carry no information);
the remaining factors follow by descending severity multiple. Display and
export both format factors through format_factors.
"""

__all__ = [
    "COMPLIANT_TEXT",
    "classify_record",
    "format_factor",
    "format_factors",
    "rank_exceedances",
]

COMPLIANT_TEXT = "compliant"

_DECLARATION_ORDER = {key: index for index, key in enumerate(INDICATOR_KEYS)}


def _rank_key(factor: ExceededFactor) -> tuple[int, float, int]:
    order = _DECLARATION_ORDER[factor.key]
    if factor.priority:
        return (0, 0.0, order)
    return (1, -factor.multiple, order)


def rank_exceedances(factors: Iterable[ExceededFactor]) -> tuple[ExceededFactor, ...]:
    """Priority factors first (declaration order), then descending multiple.

    Equal multiples fall back to declaration order, so the result does not
    depend on the input order.
    """
    return tuple(sorted(factors, key=_rank_key))


def classify_record(record: Record, water_type: WaterType) -> ClassificationResult:
    """Grade ``record`` and rank its exceedance factors."""
    result = evaluate_record(record, water_type)
    return replace(result, factors=rank_exceedances(result.factors))


def format_factor(factor: ExceededFactor) -> str:
    if factor.priority:
        return factor.name
    return f"{factor.name}({factor.multiple:.2f})"


def format_factors(factors: Iterable[ExceededFactor], separator: str = ", ") -> str:
    """Ranked factors as one string; COMPLIANT_TEXT when there are none."""
    parts = [format_factor(f) for f in factors]
    return separator.join(parts) if parts else COMPLIANT_TEXT
