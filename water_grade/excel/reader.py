from __future__ import annotations

import csv
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

"""Spreadsheet reader: first sheet (or CSV) -> in-memory grid.

The grid is a list of rows, each a list of plain Python cells (str, int,
float, datetime or None). No header handling happens here; the header row is
located later by water_grade.excel.header.
"""

__all__ = [
    "EXCEL_SUFFIXES",
    "GridReadError",
    "dataframe_to_grid",
    "read_grid",
]

EXCEL_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
CSV_SUFFIXES = frozenset({".csv"})
# Only empty cells are missing; "NA", "None", "null" ... stay text (site labels).
NA_OPTIONS: dict[str, Any] = {"keep_default_na": False, "na_values": [""]}
CSV_ENCODING = "utf-8-sig"


class GridReadError(Exception):
    """Raised when the source file cannot be read into a grid."""


def _plain(value: Any) -> Any:
    if isinstance(value, str):
        return value
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    return value


def _csv_width(path: Path) -> int:
    with path.open(newline="", encoding=CSV_ENCODING) as fh:
        return max((len(row) for row in csv.reader(fh)), default=0)


def _read_csv(path: Path) -> pd.DataFrame:
    """Read a CSV whose lines may differ in field count (title row above the header)."""
    width = _csv_width(path)
    if width == 0:
        raise pd.errors.EmptyDataError("no columns to parse")
    return pd.read_csv(
        path,
        header=None,
        names=list(range(width)),
        encoding=CSV_ENCODING,
        # 空行も残す: グリッドの行番号をファイルの行番号と一致させる (unknown-site-{row})
        skip_blank_lines=False,
        **NA_OPTIONS,
    )


def dataframe_to_grid(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into ragged rows.

    Trailing blank cells are trimmed so that a row holds exactly the cells up to
    its last value; a completely blank row becomes [].
    """
    grid: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        row = [_plain(v) for v in raw]
        while row and (row[-1] is None or (isinstance(row[-1], str) and row[-1] == "")):
            row.pop()
        grid.append(row)
    return grid


def read_grid(path: Path) -> list[list[Any]]:
    """Read the first sheet of a workbook, or a CSV file, as a grid.

    Parameters
    ----------
    path: ワークブック / CSV ファイルパス

    Raises
    ------
    GridReadError: file missing, unsupported suffix or parser failure
    """
    path = Path(path)
    if not path.exists():
        raise GridReadError(f"file not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix in EXCEL_SUFFIXES:
            # 先頭シートのみ (複数シートは対象外)
            df = pd.read_excel(path, sheet_name=0, header=None, **NA_OPTIONS)
        elif suffix in CSV_SUFFIXES:
            df = _read_csv(path)
        else:
            raise GridReadError(f"unsupported file type: {path.suffix or '(none)'}")
    except GridReadError:
        raise
    except pd.errors.EmptyDataError:
        return []
    except Exception as e:
        raise GridReadError(f"failed to read {path.name}: {e}") from e
    return dataframe_to_grid(df)
