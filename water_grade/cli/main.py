from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.reader import GridReadError
from ..excel.writer import ExportError, export_results, write_template
from ..logging.error_log import LOGS_DIR, ErrorLogBuffer
from ..logging.init import enable_debug, log_summary, setup_logging
from ..models.error_record import ErrorRecord
from ..models.grading_summary import GradingSummary
from ..models.indicator import ThresholdTableError, WaterType, validate_threshold_tables
from ..models.record import RecordSet
from ..services.display import render_raw_details, render_result_table, render_standards_table
from ..services.pipeline import EmptyGridError, NoRecordsError, classify_records, import_file
from ..services.progress import ProgressTracker
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, resolve and load the YAML config
- Import the source workbook into a RecordSet
- Classify every record for the selected water type
- Print the result table, optionally export it, print the SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NO_RECORDS = 2

CONFIG_ENV_VAR = "WATER_GRADE_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a broken file only produces a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except (OSError, UnicodeDecodeError) as e:  # pragma: no cover
        logging.getLogger(__name__).warning(f"failed to load .env: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="water-grade", description="Water quality grade classifier")
    p.add_argument("--config", type=Path, help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    p.add_argument("--water-type", choices=[w.value for w in WaterType], help="Override config water_type")
    p.add_argument("--export", type=Path, help="Write results workbook to this path")
    p.add_argument("--template", type=Path, help="Write the import template workbook and exit")
    p.add_argument("--standards", action="store_true", help="Print the grade threshold table and exit")
    p.add_argument("--inspect-data", action="store_true", help="Print header detection & raw values then exit")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env = os.getenv(CONFIG_ENV_VAR)
    return Path(env) if env else DEFAULT_CONFIG_PATH


def _fail(
    logger: logging.Logger,
    errors: ErrorLogBuffer,
    *,
    file: str,
    error_type: str,
    message: str,
    code: int = EXIT_FATAL,
) -> int:
    logger.error(message)
    errors.append(ErrorRecord.create(file, -1, error_type, message))
    log_path = errors.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")
    return code


def _inspect_data(record_set: RecordSet) -> int:
    column_map = record_set.column_map
    print(f"HEADER ROW: {record_set.header_row + 1}")
    for role, column in column_map.columns.items():
        print(f"  {role}: {'-' if column is None else column + 1}")
    for record in record_set.records:
        print(render_raw_details(record))
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] が渡された場合に sys.argv を読まないよう None のときだけ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    startup_errors = ErrorLogBuffer(LOGS_DIR)
    try:
        validate_threshold_tables()
    except ThresholdTableError as e:
        return _fail(
            logger, startup_errors, file="-", error_type="THRESHOLD_TABLE_INVALID",
            message=f"thresholds: {e}",
        )

    if args.standards:
        print(render_standards_table())
        return EXIT_SUCCESS

    if args.template is not None:
        try:
            path = write_template(args.template)
        except ExportError as e:
            return _fail(
                logger, startup_errors, file=str(args.template), error_type="EXPORT_FAILED",
                message=f"template: {e}",
            )
        logger.info(f"template written: {path}")
        return EXIT_SUCCESS

    config_path = _config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        return _fail(
            logger, startup_errors, file=str(config_path), error_type="CONFIG_INVALID",
            message=f"config: {e}",
        )

    errors = ErrorLogBuffer(cfg.logs_directory)
    water_type = WaterType(args.water_type) if args.water_type else cfg.water_type
    source = cfg.source_file
    logger.info(f"Importing: {source} (water_type={water_type.value})")

    start = time.perf_counter()
    try:
        record_set = import_file(source)
    except GridReadError as e:
        return _fail(logger, errors, file=str(source), error_type="READ_FAILED", message=f"read: {e}")
    except EmptyGridError as e:
        return _fail(logger, errors, file=str(source), error_type="EMPTY_GRID", message=f"import: {e}")
    except NoRecordsError as e:
        return _fail(
            logger, errors, file=str(source), error_type="NO_RECORDS",
            message=f"import: {e}", code=EXIT_NO_RECORDS,
        )

    if args.inspect_data:
        return _inspect_data(record_set)

    with ProgressTracker(len(record_set)) as progress:
        rows = classify_records(record_set, water_type, progress=progress)
    print(render_result_table(rows))

    export_path = args.export or cfg.export_path
    if export_path is not None:
        try:
            written = export_results(rows, export_path)
        except ExportError as e:
            return _fail(
                logger, errors, file=str(export_path), error_type="EXPORT_FAILED",
                message=f"export: {e}",
            )
        logger.info(f"exported {len(rows)} rows to {written}")

    summary = GradingSummary.from_rows(
        rows,
        header_row=record_set.header_row + 1,
        water_type=water_type.value,
        elapsed_seconds=time.perf_counter() - start,
    )
    # log_summary が "SUMMARY " を付けるので先頭を除く
    log_summary(render_summary_line(summary)[len("SUMMARY "):])
    return EXIT_SUCCESS
