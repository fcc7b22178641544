from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run JSON Lines error log.

Records collect in memory and are appended to
``<directory>/errors-YYYYMMDD-HHMMSS.log`` (UTC, stamped on first use) when
flushed. Nothing is created on disk for a run without errors.
"""

__all__ = [
    "ErrorLogBuffer",
    "ErrorRecord",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    def __init__(self, directory: Path | None = None) -> None:
        self.directory = LOGS_DIR if directory is None else Path(directory)
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._path is None:
            self._path = self.directory / f"errors-{datetime.now(UTC):{TIMESTAMP_FMT}}.log"
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records to the log file and return its path (None if idle)."""
        if not self._pending:
            return None
        path = self.file_path
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = "".join(f"{record.to_json_line()}\n" for record in self._pending)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(lines)
        self._pending = []
        return path
