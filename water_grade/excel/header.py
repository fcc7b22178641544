from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ..models.column_map import ROLES, ColumnMap
from ..models.indicator import INDICATOR_KEYS
from .cells import cell_text
from .keywords import HEADER_KEYWORDS, KeywordRule

"""Header resolution: locate the header row and map roles to columns.

Workbooks produced by monitoring stations often carry a title row above the
real header. The header is therefore searched in the first two rows only; the
row whose text mentions enough indicators wins, row 0 being the default.
"""

__all__ = [
    "HEADER_MATCH_THRESHOLD",
    "detect_header_row",
    "find_column",
    "header_score",
    "resolve_columns",
]

logger = logging.getLogger(__name__)

# Minimum number of indicator roles a row must mention to count as a header.
HEADER_MATCH_THRESHOLD = 3

Row = Sequence[Any]


def header_score(row: Row | None, keywords: Mapping[str, KeywordRule] = HEADER_KEYWORDS) -> int:
    """Number of indicator roles with a keyword somewhere in ``row``.

    Cells are concatenated before matching, so the score is about the row as a
    whole rather than about individual columns.
    """
    if not row:
        return 0
    text = "".join(cell_text(c) for c in row).lower()
    return sum(1 for key in INDICATOR_KEYS if any(k in text for k in keywords[key].triggers))


def detect_header_row(
    rows: Sequence[Row | None],
    threshold: int = HEADER_MATCH_THRESHOLD,
    keywords: Mapping[str, KeywordRule] = HEADER_KEYWORDS,
) -> int:
    """Return 1 when row 0 looks like a title and row 1 like a header, else 0."""
    if not rows:
        return 0
    if header_score(rows[0], keywords) >= threshold:
        return 0
    if len(rows) > 1 and header_score(rows[1], keywords) >= threshold:
        return 1
    return 0


def find_column(headers: Sequence[str], rule: KeywordRule) -> int | None:
    """First column (in column order) whose header satisfies ``rule``."""
    for index, header in enumerate(headers):
        if rule.matches(header):
            return index
    return None


def resolve_columns(
    rows: Sequence[Row | None],
    keywords: Mapping[str, KeywordRule] = HEADER_KEYWORDS,
    threshold: int = HEADER_MATCH_THRESHOLD,
) -> ColumnMap:
    """Detect the header row and resolve every role to a column index.

    Roles without a matching header resolve to None; extraction then leaves
    that indicator out (or uses a placeholder for site/time).
    """
    header_row = detect_header_row(rows, threshold, keywords)
    if header_row == 1:
        logger.info("first row looks like a title; using row 2 as header")
    header = rows[header_row] if rows else None
    headers = [cell_text(c).lower() for c in (header or [])]
    columns = {role: find_column(headers, keywords[role]) for role in ROLES}
    column_map = ColumnMap(header_row=header_row, columns=columns)
    if column_map.unresolved:
        logger.debug(f"unresolved roles: {column_map.unresolved}")
    return column_map
