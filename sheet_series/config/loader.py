from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import ColumnConfig, LimitsConfig, PipelineConfig

"""Config loader.

Responsibilities:
- Load a YAML config file (every key optional)
- Validate it against the bundled JSON schema (config/schema.json)
- Apply defaults for missing keys
- Apply SHEET_SERIES_* environment overrides on top (see apply_env_overrides)
"""

__all__ = [
    "ENV_PREFIX",
    "SCHEMA_PATH",
    "ConfigError",
    "apply_env_overrides",
    "default_config",
    "load_config",
]

SCHEMA_PATH = Path(__file__).parent / "schema.json"
ENV_PREFIX = "SHEET_SERIES_"


class ConfigError(Exception):
    pass


def default_config() -> PipelineConfig:
    return PipelineConfig()


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the data
            violates the schema (unknown keys, wrong types, out-of-range values).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> PipelineConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config validation failed: top-level value must be a mapping")

    _validate_config_schema(data)

    defaults = default_config()
    cols_raw = data.get("columns", {})
    limits_raw = data.get("limits", {})
    columns = ColumnConfig(
        value=cols_raw.get("value", defaults.columns.value),
        time=cols_raw.get("time", defaults.columns.time),
    )
    if columns.value == columns.time:
        raise ConfigError("config validation failed: value and time columns must differ")
    limits = LimitsConfig(
        max_file_size_mb=limits_raw.get("max_file_size_mb", defaults.limits.max_file_size_mb),
        max_sheets_warn=limits_raw.get("max_sheets_warn", defaults.limits.max_sheets_warn),
        max_points_warn=limits_raw.get("max_points_warn", defaults.limits.max_points_warn),
    )
    extensions = data.get("accepted_extensions")
    return PipelineConfig(
        columns=columns,
        limits=limits,
        accepted_extensions=(
            tuple(e.lower() for e in extensions) if extensions else defaults.accepted_extensions
        ),
        na_strings=frozenset(data.get("na_strings", ())),
    )


def apply_env_overrides(config: PipelineConfig, environ: Mapping[str, str] | None = None) -> PipelineConfig:
    """Override limits from SHEET_SERIES_* environment variables.

    Recognized: SHEET_SERIES_MAX_FILE_SIZE_MB, SHEET_SERIES_MAX_SHEETS_WARN,
    SHEET_SERIES_MAX_POINTS_WARN. Unset variables keep the config value.

    Raises:
        ConfigError: If a variable is set but not a valid number
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}
    for field_name, cast in (
        ("max_file_size_mb", float),
        ("max_sheets_warn", int),
        ("max_points_warn", int),
    ):
        raw = env.get(ENV_PREFIX + field_name.upper())
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[field_name] = cast(raw.strip())
        except ValueError as e:
            raise ConfigError(f"invalid {ENV_PREFIX}{field_name.upper()}: {raw!r}") from e
    if not overrides:
        return config
    return replace(config, limits=replace(config.limits, **overrides))
