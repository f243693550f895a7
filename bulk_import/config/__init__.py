"""Configuration loading."""

from .loader import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_PATH,
    ConfigError,
    ErrorLogConfig,
    ImportConfig,
    load_config,
    resolve_config_path,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "ErrorLogConfig",
    "ImportConfig",
    "load_config",
    "resolve_config_path",
]
