from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

"""Cell helpers shared by header resolution and record extraction."""

__all__ = [
    "cell_text",
    "is_blank",
    "is_number",
]


def is_blank(value: Any) -> bool:
    """None, NaN/NaT or whitespace-only text."""
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict, set)):
        return False
    return bool(pd.isna(value))


def is_number(value: Any) -> bool:
    # bool は数値扱いしない
    if isinstance(value, (bool, np.bool_)):
        return False
    return isinstance(value, (int, float, np.number)) and not is_blank(value)


def cell_text(value: Any) -> str:
    """Display text of a cell; integral floats lose their trailing '.0'."""
    if is_blank(value):
        return ""
    if is_number(value):
        number = value.item() if isinstance(value, np.generic) else value
        if isinstance(number, float) and number.is_integer():
            return str(int(number))
        return str(number)
    return str(value).strip()
