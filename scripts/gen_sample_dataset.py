#!/usr/bin/env python3
"""Sample monitoring workbook generator.

Generates a synthetic workbook in the layout the importer understands:
- Row 1: Title row (omit with --no-title)
- Row 2: Header row (Chinese indicator names)
- Row 3+: One monitoring record per row

A share of the readings is replaced by the instrument sentinel -1 or left
blank so that the extraction rules get exercised.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

HEADER = ["断面名称", "采样时间", "pH值", "溶解氧", "高锰酸盐指数", "化学需氧量", "五日生化需氧量", "氨氮", "总磷"]

# (low, high) uniform ranges per indicator column, wide enough to hit every grade
RANGES = {
    "pH值": (5.0, 10.0),
    "溶解氧": (1.0, 9.0),
    "高锰酸盐指数": (1.0, 18.0),
    "化学需氧量": (8.0, 50.0),
    "五日生化需氧量": (1.0, 12.0),
    "氨氮": (0.05, 2.5),
    "总磷": (0.005, 0.6),
}


def generate_readings(rows: int, seed: int = 42, sentinel_rate: float = 0.02, blank_rate: float = 0.03) -> pd.DataFrame:
    """Random readings with sentinel (-1) and blank cells mixed in."""
    rng = np.random.default_rng(seed)
    data: dict[str, object] = {
        "断面名称": [f"断面{(i % 50) + 1}" for i in range(rows)],
        "采样时间": pd.date_range("2024-01-01", periods=rows, freq="D").strftime("%Y/%m/%d").tolist(),
    }
    for column, (low, high) in RANGES.items():
        values = np.round(rng.uniform(low, high, rows), 3).astype(object)
        draw = rng.random(rows)
        values[draw < sentinel_rate] = -1
        values[(draw >= sentinel_rate) & (draw < sentinel_rate + blank_rate)] = None
        data[column] = values.tolist()
    return pd.DataFrame(data, columns=HEADER)


def create_workbook(output_path: Path, rows: int, *, title: str | None = "监测数据导入表", seed: int = 42) -> None:
    df = generate_readings(rows, seed)
    sheet: list[list[object]] = []
    if title:
        sheet.append([title])
    sheet.append(HEADER)
    sheet.extend(df.values.tolist())

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(sheet).to_excel(writer, sheet_name="Sheet1", header=False, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Records: {rows:,} (+ {len(sheet) - rows} header rows)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a synthetic water quality monitoring workbook")
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=1_000, help="Number of records (default: 1,000)")
    parser.add_argument("--no-title", action="store_true", help="Start directly with the header row")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    try:
        create_workbook(args.output, args.rows, title=None if args.no_title else "监测数据导入表", seed=args.seed)
    except OSError as e:
        print(f"Error generating workbook: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
