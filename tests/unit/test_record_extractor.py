from __future__ import annotations

from datetime import date, datetime

import numpy as np
import pytest

from water_grade.excel.extract import (
    extract_records,
    format_date,
    parse_reading,
    resolve_site,
    resolve_time,
)
from water_grade.excel.header import resolve_columns
from water_grade.models.column_map import ColumnMap
from water_grade.models.record import MissingReading


def test_extract_sample_grid(sample_grid):
    column_map = resolve_columns(sample_grid)
    record_set = extract_records(sample_grid, column_map)

    assert record_set.header_row == 1
    assert len(record_set) == 2
    first, second = record_set.records
    assert first.site == "示例断面1"
    assert first.time == "2024-01-01"
    assert first.row_index == 2
    assert first.value("do") == 6.8
    assert second.site == "示例断面2"
    assert second.value("cod") == 60


def test_row_with_site_but_no_values_is_dropped(sample_grid):
    record_set = extract_records(sample_grid, resolve_columns(sample_grid))
    assert "空白断面" not in [r.site for r in record_set]


@pytest.mark.parametrize(
    "cell, expected",
    [
        (7.5, 7.5),
        (0, 0.0),
        ("0.52", 0.52),
        ("0.52mg/L", 0.52),
        (" 1.5 ", 1.5),
        ("1e-2", 0.01),
        (np.float64(3.25), 3.25),
        (np.int64(4), 4.0),
    ],
)
def test_parse_reading_numbers(cell, expected):
    assert parse_reading(cell) == pytest.approx(expected)


@pytest.mark.parametrize("cell", [None, "", "   ", "n.d.", "<0.01", "未检出", float("nan"), True])
def test_parse_reading_not_a_number(cell):
    assert parse_reading(cell) is MissingReading.NOT_A_NUMBER


@pytest.mark.parametrize("cell", [-1, -1.0, "-1", np.float64(-1)])
def test_parse_reading_sentinel(cell):
    assert parse_reading(cell) is MissingReading.INVALID_READING


def test_sentinel_is_absent_but_raw_is_kept():
    rows = [["断面", "ph", "溶解氧", "氨氮"], ["S1", 7.2, -1, 0.3]]
    record = extract_records(rows, resolve_columns(rows)).records[0]
    assert record.readings["do"] is MissingReading.INVALID_READING
    assert record.value("do") is None
    assert record.raw["do"] == -1
    assert record.present_values() == {"ph": 7.2, "nh3_n": 0.3}


def test_unresolved_indicator_is_absent_from_record():
    rows = [["断面", "ph", "溶解氧", "氨氮"], ["S1", 7.2, 6.0, 0.3]]
    record = extract_records(rows, resolve_columns(rows)).records[0]
    assert "tp" not in record.readings
    assert "tp" not in record.raw


def test_blank_and_empty_rows_are_skipped():
    rows = [
        ["断面", "ph", "溶解氧", "氨氮"],
        [],
        [None, None, None],
        ["", "  ", None, None],
        ["S1", 7.0, 6.0, 0.3],
    ]
    record_set = extract_records(rows, resolve_columns(rows))
    assert [r.site for r in record_set] == ["S1"]
    assert record_set.records[0].row_index == 4


def test_ragged_row_shorter_than_indicator_columns():
    rows = [["断面", "ph", "溶解氧", "氨氮"], ["S1", 7.0]]
    record = extract_records(rows, resolve_columns(rows)).records[0]
    assert record.value("ph") == 7.0
    assert record.readings["nh3_n"] is MissingReading.NOT_A_NUMBER
    assert record.raw["nh3_n"] is None


def test_site_placeholder_uses_row_index():
    rows = [["断面", "ph", "溶解氧", "氨氮"], [None, 7.0, 6.0, 0.3]]
    record = extract_records(rows, resolve_columns(rows)).records[0]
    assert record.site == "unknown-site-1"


def test_site_without_site_column():
    column_map = ColumnMap(header_row=0, columns={"ph": 0})
    assert resolve_site([7.0], column_map, 5) == "unknown-site-5"


def test_numeric_site_label_drops_float_suffix():
    column_map = ColumnMap(header_row=0, columns={"site": 0, "ph": 1})
    assert resolve_site([101.0, 7.0], column_map, 1) == "101"


def test_time_from_year_and_month():
    column_map = ColumnMap(header_row=0, columns={"year": 0, "month": 1, "time": 2})
    assert resolve_time([2024, 3, "2024/05/06"], column_map) == "2024-03-01"
    assert resolve_time([2024.0, 11.0, None], column_map) == "2024-11-01"
    assert resolve_time(["2024", "7", None], column_map) == "2024-07-01"


def test_time_falls_back_to_time_column_when_month_blank():
    column_map = ColumnMap(header_row=0, columns={"year": 0, "month": 1, "time": 2})
    assert resolve_time([2024, None, "2024/05/06"], column_map) == "2024-05-06"
    assert resolve_time([2024, None, None], column_map) == "-"


def test_time_placeholder_without_columns():
    column_map = ColumnMap(header_row=0, columns={"ph": 0})
    assert resolve_time([7.0], column_map) == "-"


@pytest.mark.parametrize(
    "cell, expected",
    [
        (45292, "2024-01-01"),
        (45292.75, "2024-01-01"),
        (1, "1899-12-31"),
        (datetime(2024, 3, 5, 10, 30), "2024-03-05"),
        (date(2023, 12, 31), "2023-12-31"),
        ("2024/01/05", "2024-01-05"),
        ("2024年1月", "2024年1月"),
        (None, "-"),
    ],
)
def test_format_date(cell, expected):
    assert format_date(cell) == expected


def test_extraction_is_repeatable(sample_grid):
    column_map = resolve_columns(sample_grid)
    assert extract_records(sample_grid, column_map) == extract_records(sample_grid, column_map)
