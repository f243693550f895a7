"""Entity schemas (built-in and config-defined)."""

from .entities import BUILTIN_SCHEMAS, EMAIL_PATTERN, HEX_COLOR_PATTERN
from .registry import UnknownEntityError, build_registry, entity_from_config, get_entity_schema

__all__ = [
    "BUILTIN_SCHEMAS",
    "EMAIL_PATTERN",
    "HEX_COLOR_PATTERN",
    "UnknownEntityError",
    "build_registry",
    "entity_from_config",
    "get_entity_schema",
]
