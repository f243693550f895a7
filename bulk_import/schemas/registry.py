from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..models.field_schema import EntitySchema, FieldSpec, UniqueKey
from .entities import BUILTIN_SCHEMAS

"""Entity schema registry.

Combines the built-in schemas with entity definitions from the config file.
A config entity whose name matches a built-in replaces it.
"""

__all__ = [
    "UnknownEntityError",
    "entity_from_config",
    "build_registry",
    "get_entity_schema",
]


class UnknownEntityError(LookupError):
    """Raised when an entity type name is not registered."""


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def entity_from_config(name: str, data: Mapping[str, Any]) -> EntitySchema:
    """Build an EntitySchema from a config `entities.<name>` mapping.

    Raises:
        ValueError: If a field pattern does not compile or a composite key
            names unknown columns
    """
    key = _normalize_name(name)
    label = data.get("label", key.replace("_", " "))
    fields = []
    for f in data["fields"]:
        try:
            fields.append(FieldSpec.from_dict(f))
        except re.error as e:
            raise ValueError(f"invalid pattern for {key}.{f['name']}: {e}") from e
    return EntitySchema(
        name=key,
        label=label,
        plural=data.get("plural", f"{key}s"),
        fields=tuple(fields),
        template_rows=tuple(dict(r) for r in data.get("template_rows", [])),
        unique_together=tuple(UniqueKey.from_dict(u) for u in data.get("unique_together", [])),
    )


def build_registry(custom_entities: Mapping[str, Mapping[str, Any]] | None = None) -> dict[str, EntitySchema]:
    registry = dict(BUILTIN_SCHEMAS)
    for name, data in (custom_entities or {}).items():
        schema = entity_from_config(name, data)
        registry[schema.name] = schema
    return registry


def get_entity_schema(name: str, registry: Mapping[str, EntitySchema] | None = None) -> EntitySchema:
    """Look up an entity schema by name ("job_role" and "job-role" are equivalent).

    Raises:
        UnknownEntityError: If no schema is registered under that name
    """
    schemas = registry if registry is not None else BUILTIN_SCHEMAS
    key = _normalize_name(name)
    try:
        return schemas[key]
    except KeyError:
        available = ", ".join(sorted(schemas))
        raise UnknownEntityError(f"unknown entity type '{name}' (available: {available})") from None
