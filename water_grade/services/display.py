from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from ..excel.cells import cell_text, is_blank
from ..models.classification import ClassifiedRow
from ..models.indicator import GRADE_LABELS, INDICATORS, Ordering, WaterType
from ..models.record import Record
from .ranking import format_factors

"""Terminal rendering of classification results and reference tables."""

__all__ = [
    "RESULT_COLUMNS",
    "render_raw_details",
    "render_result_table",
    "render_standards_table",
    "result_frame",
    "standards_frame",
]

RESULT_COLUMNS = ["No.", "Site", "Time", "Grade", "Exceedance factors"]


def result_frame(rows: Sequence[ClassifiedRow]) -> pd.DataFrame:
    return pd.DataFrame(
        [[r.index, r.site, r.time, r.grade, format_factors(r.factors)] for r in rows],
        columns=RESULT_COLUMNS,
    )


def render_result_table(rows: Sequence[ClassifiedRow]) -> str:
    if not rows:
        return "(no records)"
    return result_frame(rows).to_string(index=False)


def render_raw_details(record: Record) -> str:
    """Raw cell of every indicator, '-' where unmeasured or not mapped."""
    lines = [f"{record.site} {record.time}"]
    for spec in INDICATORS:
        raw = record.raw.get(spec.key)
        lines.append(f"  {spec.name}: {'-' if is_blank(raw) else cell_text(raw)}")
    return "\n".join(lines)


def standards_frame() -> pd.DataFrame:
    """Grade I-V boundaries; total phosphorus listed once per water type."""
    data: dict[str, list[float]] = {}
    for spec in INDICATORS:
        if spec.ordering is Ordering.RANGE:
            continue
        if spec.per_water_type is not None:
            for water_type in WaterType:
                data[f"{spec.name} ({water_type.value})"] = list(spec.limits(water_type))
        else:
            data[spec.name] = list(spec.limits(WaterType.RIVER))
    return pd.DataFrame.from_dict(data, orient="index", columns=list(GRADE_LABELS[:5]))


def render_standards_table() -> str:
    return standards_frame().to_string()
