from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import best_match

from ..models.config_models import DEFAULT_LOGS_DIRECTORY, GradingConfig
from ..models.indicator import WaterType

"""YAML run configuration.

The file names the workbook to grade and the water body type; export and
error-log locations are optional. Its shape is fixed by the bundled
``config_schema.json`` (draft-07).
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/grading.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@lru_cache(maxsize=1)
def _validator() -> jsonschema.Draft7Validator:
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    return jsonschema.Draft7Validator(schema)


def _check(data: Any) -> None:
    """Raise ConfigError for the most relevant schema violation, if any."""
    error = best_match(_validator().iter_errors(data))
    if error is not None:
        raise ConfigError(f"config validation failed: {error.message}")


def load_config(path: Path) -> GradingConfig:
    """Read, validate and convert the config at ``path``.

    Raises:
        ConfigError: file missing, not YAML, or rejected by the schema
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    # 空ファイルは {} として required エラーにする
    if data is None:
        data = {}
    _check(data)

    export_path = data.get("export_path")
    return GradingConfig(
        source_file=Path(data["source_file"]),
        water_type=WaterType(data["water_type"]),
        export_path=Path(export_path) if export_path else None,
        logs_directory=Path(data.get("logs_directory") or DEFAULT_LOGS_DIRECTORY),
    )
