# Shared pytest fixtures
from __future__ import annotations

import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pandas as pd
import pytest

TITLE_ROW = ["监测数据导入表"]
HEADER_ROW = ["断面名称", "采样时间", "pH值", "溶解氧", "高锰酸盐指数", "化学需氧量", "五日生化需氧量", "氨氮", "总磷"]
GOOD_ROW = ["示例断面1", "2024-01-01", 7.5, 6.8, 3.2, 18, 2.4, 0.45, 0.12]
BAD_ROW = ["示例断面2", "2024-01-02", 8.0, 1.5, 15, 60, 12, 2.5, 0.6]
# site only, every reading unusable -> never extracted
EMPTY_READINGS_ROW = ["空白断面", "2024-01-03", None, -1, "", None, "n.d.", None, None]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_grid() -> list[list[Any]]:
    return [TITLE_ROW, HEADER_ROW, GOOD_ROW, BAD_ROW, EMPTY_READINGS_ROW, []]


def _make_workbook(path: Path, rows: list[list[Any]], sheet_name: str = "Sheet1") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    return _make_workbook


@pytest.fixture()
def sample_workbook(temp_workdir: Path, sample_grid: list[list[Any]]) -> Path:
    return _make_workbook(temp_workdir / "data" / "monitoring.xlsx", sample_grid)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_file: ./data/monitoring.xlsx
water_type: river
export_path: ./out/result.xlsx
logs_directory: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "grading.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
