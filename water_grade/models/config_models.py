from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .indicator import WaterType

"""Config dataclasses for the water quality grading tool.

These are separate from the loader implementation in water_grade/config/loader.py
and focus on typing; the loader fills them from YAML after schema validation.
"""

__all__ = [
    "GradingConfig",
]

DEFAULT_LOGS_DIRECTORY = "./logs"


@dataclass(frozen=True)
class GradingConfig:
    """Root configuration for one grading run.

    CLI flags (--water-type / --export) take precedence over these values.
    """
    source_file: Path  # workbook or CSV to import (first sheet only)
    water_type: WaterType  # selects the total phosphorus table
    export_path: Path | None = None  # results workbook; None = no export
    logs_directory: Path = Path(DEFAULT_LOGS_DIRECTORY)  # JSON Lines error log location
