from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..source.fetcher import DEFAULT_SOURCE_URL

"""Config loader for the heating degree-day viewer.

Responsibilities:
- Load YAML config (default ``config/degreedays.yml``)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults for every missing key
- Apply environment overrides (DEGREEDAYS_SOURCE_URL, DEGREEDAYS_TIMEOUT)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/degreedays.yml")

ENV_SOURCE_URL = "DEGREEDAYS_SOURCE_URL"
ENV_TIMEOUT = "DEGREEDAYS_TIMEOUT"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ViewerConfig:
    source_url: str = DEFAULT_SOURCE_URL  # must contain {year}
    timeout_seconds: float | None = None  # None: transport default
    delimiter: str = ","
    encoding: str = "utf-8"
    default_location: str = "Vantaa"
    year_span: int = 18  # current year + previous 17
    error_log: bool = False
    logs_directory: str = "./logs"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or data fails
            validation (unknown keys, wrong types, out-of-range values)
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


def _apply_env_overrides(cfg: ViewerConfig) -> ViewerConfig:
    url = os.getenv(ENV_SOURCE_URL)
    if url:
        if "{year}" not in url:
            raise ConfigError(f"{ENV_SOURCE_URL} must contain '{{year}}': {url}")
        cfg = replace(cfg, source_url=url)
    timeout = os.getenv(ENV_TIMEOUT)
    if timeout:
        try:
            value = float(timeout)
        except ValueError as e:
            raise ConfigError(f"{ENV_TIMEOUT} is not a number: {timeout!r}") from e
        if value <= 0:
            raise ConfigError(f"{ENV_TIMEOUT} must be positive: {timeout!r}")
        cfg = replace(cfg, timeout_seconds=value)
    return cfg


def load_config(path: Path | None = None) -> ViewerConfig:
    """Load the viewer config.

    An explicit ``path`` must exist. Without one, ``config/degreedays.yml`` is
    read if present and built-in defaults are used otherwise.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        if not path.exists():
            return _apply_env_overrides(ViewerConfig())
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ViewerConfig()
    timeout = data.get("timeout_seconds", defaults.timeout_seconds)
    cfg = ViewerConfig(
        source_url=data.get("source_url", defaults.source_url),
        timeout_seconds=float(timeout) if timeout is not None else None,
        delimiter=data.get("delimiter", defaults.delimiter),
        encoding=data.get("encoding", defaults.encoding),
        default_location=data.get("default_location", defaults.default_location),
        year_span=data.get("year_span", defaults.year_span),
        error_log=data.get("error_log", defaults.error_log),
        logs_directory=data.get("logs_directory", defaults.logs_directory),
    )
    return _apply_env_overrides(cfg)
