"""Domain models for the water quality grading tool.

This package contains the static indicator tables and the value types passed
between header resolution, extraction, grading and reporting.
"""

from .classification import ClassificationResult, ClassifiedRow, ExceededFactor
from .column_map import ColumnMap
from .config_models import GradingConfig
from .indicator import INDICATORS, IndicatorSpec, Ordering, WaterType
from .record import MissingReading, Record, RecordSet

__all__ = [
    # Static tables
    "INDICATORS",
    "IndicatorSpec",
    "Ordering",
    "WaterType",
    # Configuration models
    "GradingConfig",
    # Extraction models
    "ColumnMap",
    "MissingReading",
    "Record",
    "RecordSet",
    # Classification models
    "ClassificationResult",
    "ClassifiedRow",
    "ExceededFactor",
]
