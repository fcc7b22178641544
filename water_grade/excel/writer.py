from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.classification import ClassifiedRow
from ..services.ranking import format_factors

"""Workbook output: classification results and the import template."""

__all__ = [
    "EXPORT_COLUMNS",
    "ExportError",
    "RESULT_SHEET",
    "TEMPLATE_ROWS",
    "TEMPLATE_SHEET",
    "export_results",
    "write_template",
]

RESULT_SHEET = "Result"
TEMPLATE_SHEET = "Template"
EXPORT_COLUMNS = ["No.", "Site", "Time", "Grade", "Exceedance factors (multiple)"]

# Title row + header row + sample rows; the title row is skipped on import.
TEMPLATE_ROWS: list[list[Any]] = [
    ["监测数据导入表 (第一行标题可自动跳过)"],
    ["断面名称", "采样时间", "pH值", "溶解氧", "高锰酸盐指数", "化学需氧量", "五日生化需氧量", "氨氮", "总磷"],
    ["示例断面1", "2024-01-01", 7.5, 6.8, 3.2, 18, 2.4, 0.45, 0.12],
    ["示例断面2(严重超标)", "2024-01-02", 8.0, 1.5, 15, 60, 12, 2.5, 0.6],
]


class ExportError(Exception):
    """Raised when a workbook cannot be written."""


def _write_sheet(path: Path, sheet_name: str, df: pd.DataFrame, *, header: bool) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name=sheet_name, header=header, index=False)
    except (OSError, ValueError) as e:
        raise ExportError(f"failed to write {path}: {e}") from e
    return path


def export_results(rows: Sequence[ClassifiedRow], path: Path) -> Path:
    """Write one line per classified record to the ``Result`` sheet."""
    df = pd.DataFrame(
        [[r.index, r.site, r.time, r.grade, format_factors(r.factors)] for r in rows],
        columns=EXPORT_COLUMNS,
    )
    return _write_sheet(path, RESULT_SHEET, df, header=True)


def write_template(path: Path) -> Path:
    """Write the import template users fill in."""
    return _write_sheet(path, TEMPLATE_SHEET, pd.DataFrame(TEMPLATE_ROWS), header=False)
