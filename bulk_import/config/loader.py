from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.field_schema import EntitySchema
from ..schemas.registry import build_registry

"""Config loader for the CSV bulk import tool.

Responsibilities:
- Resolve the config path (--config, BULK_IMPORT_CONFIG, config/import.yml)
- Load YAML and validate it against config_schema.json
- Apply defaults (encoding=utf-8, error log enabled under ./logs)
- Build the entity registry (built-ins plus config-defined entities)
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "ErrorLogConfig",
    "ImportConfig",
    "resolve_config_path",
    "load_config",
]

CONFIG_ENV_VAR = "BULK_IMPORT_CONFIG"
DEFAULT_CONFIG_PATH = Path("config/import.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ErrorLogConfig:
    enabled: bool = True
    directory: str = "logs"


@dataclass(frozen=True)
class ImportConfig:
    encoding: str = "utf-8"
    error_log: ErrorLogConfig = field(default_factory=ErrorLogConfig)
    entities: dict[str, EntitySchema] = field(default_factory=build_registry)
    source: Path | None = None  # None when running on built-in defaults


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the packaged JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data violates it (unknown keys, wrong types, ...)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"config validation failed at {location}: {e.message}") from e


def resolve_config_path(explicit: Path | None = None) -> tuple[Path, bool]:
    """Return (path, explicitly_requested).

    An explicit path wins over the environment variable, which wins over the
    default location.
    """
    if explicit is not None:
        return explicit, True
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env), True
    return DEFAULT_CONFIG_PATH, False


def load_config(path: Path | None = None) -> ImportConfig:
    cfg_path, explicit = resolve_config_path(path)
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"config file not found: {cfg_path}")
        return ImportConfig()
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {cfg_path}")

    _validate_config_schema(data)

    log_raw = data.get("error_log", {})
    error_log = ErrorLogConfig(
        enabled=log_raw.get("enabled", True),
        directory=log_raw.get("directory", "logs"),
    )
    try:
        entities = build_registry(data.get("entities"))
    except ValueError as e:
        raise ConfigError(str(e)) from e

    return ImportConfig(
        encoding=data.get("encoding", "utf-8"),
        error_log=error_log,
        entities=entities,
        source=cfg_path,
    )
