from __future__ import annotations

from ..models.grading_summary import GradingSummary

"""Summary line rendering for the SUMMARY output."""


def _format_seconds(value: float) -> str:
    # 整数なら小数点なし, 極小値は指数表記を避ける
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(summary: GradingSummary) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY records={n} exceeded={m} header_row={r} water_type={t}
    grades=I:{a},II:{b},III:{c},IV:{d},V:{e},below V:{f} elapsed_sec={s}

    Examples:
        >>> s = GradingSummary(
        ...     total_records=2, exceeded_records=1, header_row=2, water_type="river",
        ...     grade_counts={"I": 0, "II": 1, "III": 0, "IV": 0, "V": 0, "below V": 1},
        ...     elapsed_seconds=0.5,
        ... )
        >>> render_summary_line(s)
        'SUMMARY records=2 exceeded=1 header_row=2 water_type=river grades=I:0,II:1,III:0,IV:0,V:0,below V:1 elapsed_sec=0.5'
    """
    grades = ",".join(f"{label}:{count}" for label, count in summary.grade_counts.items())
    return (
        f"SUMMARY records={summary.total_records} "
        f"exceeded={summary.exceeded_records} "
        f"header_row={summary.header_row} "
        f"water_type={summary.water_type} "
        f"grades={grades} "
        f"elapsed_sec={_format_seconds(summary.elapsed_seconds)}"
    )
