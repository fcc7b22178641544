from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classification import ClassifiedRow
from .indicator import GRADE_LABELS

"""Aggregated outcome of one grading run, used for the SUMMARY line."""

__all__ = [
    "GradingSummary",
]


@dataclass(frozen=True)
class GradingSummary:
    """Counts for one record set graded against one water type."""
    total_records: int
    exceeded_records: int
    header_row: int  # 1-based, as shown to users
    water_type: str
    grade_counts: dict[str, int] = field(default_factory=dict)  # label -> count, all labels present
    elapsed_seconds: float = 0.0

    @classmethod
    def from_rows(
        cls,
        rows: Iterable[ClassifiedRow],
        *,
        header_row: int,
        water_type: str,
        elapsed_seconds: float = 0.0,
    ) -> GradingSummary:
        rows = list(rows)
        counts = Counter(r.grade for r in rows)
        return cls(
            total_records=len(rows),
            exceeded_records=sum(1 for r in rows if r.exceeded),
            header_row=header_row,
            water_type=water_type,
            grade_counts={label: counts.get(label, 0) for label in GRADE_LABELS},
            elapsed_seconds=elapsed_seconds,
        )
