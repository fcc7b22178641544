from __future__ import annotations

import logging
import math
import re
from collections.abc import Sequence
from datetime import date, datetime, timedelta
from typing import Any

from ..models.column_map import ColumnMap
from ..models.record import MissingReading, Reading, Record, RecordSet
from .cells import cell_text, is_blank, is_number

"""Record extraction from a grid using a resolved ColumnMap.

Rows after the header row become Records. Indicator cells are parsed leniently
(a leading number is enough, "0.52mg/L" -> 0.52); anything unusable becomes a
MissingReading. Rows without a single usable indicator value are dropped.
"""

__all__ = [
    "EXCEL_EPOCH",
    "INVALID_READING_SENTINEL",
    "extract_records",
    "format_date",
    "parse_reading",
    "resolve_site",
    "resolve_time",
]

logger = logging.getLogger(__name__)

# Instruments export -1 for an invalid reading.
INVALID_READING_SENTINEL = -1.0
# Spreadsheet day 0 (serial dates count days from here).
EXCEL_EPOCH = datetime(1899, 12, 30)
NO_TIME = "-"

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")


def _cell(row: Sequence[Any], column: int | None) -> Any:
    if column is None or column >= len(row):
        return None
    return row[column]


def parse_reading(value: Any) -> Reading:
    """Parse an indicator cell into a float or a MissingReading."""
    if is_blank(value):
        return MissingReading.NOT_A_NUMBER
    if is_number(value):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if match is None:
            return MissingReading.NOT_A_NUMBER
        number = float(match.group())
    if math.isnan(number):
        return MissingReading.NOT_A_NUMBER
    if number == INVALID_READING_SENTINEL:
        return MissingReading.INVALID_READING
    return number


def format_date(value: Any) -> str:
    """ISO date for serial numbers and date cells; text keeps its form with '/' -> '-'."""
    if is_blank(value):
        return NO_TIME
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if is_number(value):
        try:
            return (EXCEL_EPOCH + timedelta(days=float(value))).date().isoformat()
        except OverflowError:
            return cell_text(value)
    return str(value).replace("/", "-")


def resolve_time(row: Sequence[Any], column_map: ColumnMap) -> str:
    """Year + month columns first (first day of month), then a date/time column."""
    year = _cell(row, column_map.get("year"))
    month = _cell(row, column_map.get("month"))
    if column_map.resolved("year") and column_map.resolved("month"):
        if not is_blank(year) and not is_blank(month):
            return f"{cell_text(year)}-{cell_text(month).rjust(2, '0')}-01"
    moment = _cell(row, column_map.get("time"))
    if column_map.resolved("time") and not is_blank(moment):
        return format_date(moment)
    return NO_TIME


def resolve_site(row: Sequence[Any], column_map: ColumnMap, row_index: int) -> str:
    site = _cell(row, column_map.get("site"))
    if is_blank(site):
        return f"unknown-site-{row_index}"
    return cell_text(site)


def extract_records(rows: Sequence[Sequence[Any] | None], column_map: ColumnMap) -> RecordSet:
    """Build the RecordSet for every data row below the header row."""
    records: list[Record] = []
    indicator_columns = column_map.indicator_columns
    for row_index in range(column_map.header_row + 1, len(rows)):
        row = rows[row_index]
        if not row or all(is_blank(c) for c in row):
            continue
        readings: dict[str, Reading] = {}
        raw: dict[str, Any] = {}
        for key, column in indicator_columns.items():
            cell = _cell(row, column)
            raw[key] = cell
            readings[key] = parse_reading(cell)
        record = Record(
            row_index=row_index,
            site=resolve_site(row, column_map, row_index),
            time=resolve_time(row, column_map),
            readings=readings,
            raw=raw,
        )
        if not record.has_value:
            logger.debug(f"row {row_index + 1}: no usable indicator value, skipped")
            continue
        records.append(record)
    return RecordSet(header_row=column_map.header_row, column_map=column_map, records=tuple(records))
