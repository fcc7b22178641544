from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm

"""Record grading progress bar.

Drawn with tqdm on an interactive terminal only; when stdout is piped or
captured the tracker just counts.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Counts classified records and mirrors the count on a tqdm bar."""

    def __init__(self, total_records: int, *, description: str = "Grading records") -> None:
        self.total_records = total_records
        self.description = description
        self.processed = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any = None
        if self.enabled:
            # leave=False: 結果テーブルの前にバーを消す
            self.pbar = tqdm(
                total=total_records,
                desc=description,
                unit="record",
                leave=False,
                ncols=80,
                ascii=True,
            )

    def advance(self, count: int = 1) -> None:
        self.processed += count
        if self.pbar is not None:
            self.pbar.update(count)

    def close(self) -> None:
        if self.pbar is None:
            return
        self.pbar.close()
        self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
