from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""One line of the JSON Lines error log."""

__all__ = [
    "ERROR_TYPES",
    "ErrorRecord",
]

ERROR_TYPES = frozenset({
    "CONFIG_INVALID",
    "READ_FAILED",
    "EMPTY_GRID",
    "NO_RECORDS",
    "EXPORT_FAILED",
    "THRESHOLD_TABLE_INVALID",
})


@dataclass(frozen=True)
class ErrorRecord:
    """A fatal run failure.

    Attributes:
        timestamp: UTC time, ISO8601 with a trailing ``Z``
        file: workbook, config or export path the failure concerns
        row: 1-based grid row, -1 for file-level failures
        error_type: one of ERROR_TYPES
        message: the text also printed on the ERROR line
    """
    timestamp: str
    file: str
    row: int  # ファイル単位のエラーは -1
    error_type: str
    message: str

    @classmethod
    def create(cls, file: str, row: int, error_type: str, message: str) -> ErrorRecord:
        if error_type not in ERROR_TYPES:
            raise ValueError(f"unknown error_type: {error_type}")
        now = datetime.now(UTC)
        return cls(
            timestamp=now.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z",
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # asdict: フィールド以外のキーは出力しない
        return json.dumps(asdict(self), ensure_ascii=False)
