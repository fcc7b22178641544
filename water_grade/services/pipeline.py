from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..excel.extract import extract_records
from ..excel.header import resolve_columns
from ..excel.reader import read_grid
from ..models.classification import ClassifiedRow
from ..models.indicator import WaterType
from ..models.record import RecordSet
from .progress import ProgressTracker
from .ranking import classify_record

"""Import and classification pipeline.

import_grid turns a materialized grid into a RecordSet (one import = one
immutable value); classify_records is the single grading path shared by the
result display and the export writer.
"""

__all__ = [
    "EmptyGridError",
    "NoRecordsError",
    "ProcessingError",
    "classify_records",
    "import_file",
    "import_grid",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Base exception for processing errors."""


class EmptyGridError(ProcessingError):
    """The grid has no rows at all."""


class NoRecordsError(ProcessingError):
    """No row survived extraction."""


def import_grid(rows: Sequence[Sequence[Any] | None] | None) -> RecordSet:
    """Resolve the header and extract records from ``rows``.

    Raises:
        EmptyGridError: grid is None or has no rows
        NoRecordsError: no row carries a usable indicator value
    """
    if not rows:
        raise EmptyGridError("file has no content")
    column_map = resolve_columns(rows)
    record_set = extract_records(rows, column_map)
    if not record_set.records:
        raise NoRecordsError("no valid data rows found")
    logger.info(
        f"header row {record_set.header_row + 1}: extracted {len(record_set.records)} records"
    )
    return record_set


def import_file(path: Path) -> RecordSet:
    """read_grid + import_grid. GridReadError propagates unchanged."""
    grid = read_grid(path)
    logger.debug(f"read {len(grid)} rows from {Path(path).name}")
    return import_grid(grid)


def classify_records(
    record_set: RecordSet,
    water_type: WaterType,
    *,
    progress: ProgressTracker | None = None,
) -> list[ClassifiedRow]:
    """Classify every record of ``record_set`` against ``water_type``.

    Results are recomputed on every call; nothing is cached between the
    display and the export.
    """
    rows: list[ClassifiedRow] = []
    for index, record in enumerate(record_set.records, start=1):
        result = classify_record(record, water_type)
        rows.append(
            ClassifiedRow(
                index=index,
                site=record.site,
                time=record.time,
                grade=result.label,
                exceeded=result.exceeded,
                factors=result.factors,
            )
        )
        if progress is not None:
            progress.advance()
    return rows
