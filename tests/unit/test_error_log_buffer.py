from __future__ import annotations

import json
from pathlib import Path

from water_grade.logging.error_log import ErrorLogBuffer, ErrorRecord

KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("m.xlsx", -1, "READ_FAILED", "corrupt workbook"))
    buf.append(ErrorRecord.create("m.xlsx", -1, "NO_RECORDS", "no valid data rows found"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("./logs")
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    # flush 後バッファクリア
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(ErrorRecord.create("m.xlsx", -1, "READ_FAILED", "first"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("m.xlsx", -1, "EXPORT_FAILED", "second"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1
    assert len(path2.read_text(encoding="utf-8").splitlines()) == 2


def test_error_log_buffer_empty_flush_writes_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "nested" / "logs")
    assert buf.flush() is None
    assert not (temp_workdir / "nested").exists()


def test_error_log_buffer_creates_directory(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "nested" / "logs")
    buf.append(ErrorRecord.create("cfg.yml", -1, "CONFIG_INVALID", "bad"))
    path = buf.flush()
    assert path.parent == temp_workdir / "nested" / "logs"
    assert path.exists()
