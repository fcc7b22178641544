from __future__ import annotations

from dataclasses import dataclass

from .indicator import GRADE_III, GRADE_LABELS, PRIORITY_KEYS

"""Classification result models.

ClassificationResult is recomputed on demand for every consumer and is never
cached; ClassifiedRow is the per-record shape handed to display and export.
"""

__all__ = [
    "ClassificationResult",
    "ClassifiedRow",
    "ExceededFactor",
]


@dataclass(frozen=True)
class ExceededFactor:
    """Indicator graded worse than Grade III."""
    key: str
    name: str
    multiple: float  # (value - t2) / t2; always 0.0 for priority indicators

    @property
    def priority(self) -> bool:
        return self.key in PRIORITY_KEYS


@dataclass(frozen=True)
class ClassificationResult:
    grade: int  # 0 (Grade I) .. 5 (below V)
    factors: tuple[ExceededFactor, ...] = ()

    @property
    def label(self) -> str:
        return GRADE_LABELS[self.grade]

    @property
    def exceeded(self) -> bool:
        return self.grade > GRADE_III


@dataclass(frozen=True)
class ClassifiedRow:
    index: int  # 1-based position in the record set
    site: str
    time: str
    grade: str  # grade label
    exceeded: bool
    factors: tuple[ExceededFactor, ...] = ()
