from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Literal

"""Declarative field schema dataclasses for the CSV bulk import tool.

One EntitySchema describes an importable entity type (degree, designation,
job type, ...): its columns, which are required, which carry a format
constraint and which must be unique. A single generic validator interprets
these definitions, so adding an entity type means adding data, not code.
"""

__all__ = [
    "FieldKind",
    "FieldSpec",
    "UniqueKey",
    "EntitySchema",
]

FieldKind = Literal["string", "boolean", "date"]


@dataclass(frozen=True)
class FieldSpec:
    """Definition of a single importable column.

    Attributes:
        name: Column name as it appears in the CSV header
        required: Whether a blank / absent value is a MissingRequiredField error
        label: Capitalized noun used in messages ("Name", "Color code")
        pattern: Regular expression the trimmed value must fully match
        format_message: Message used when pattern (or date kind) does not match
        choices: Allowed values, matched case-insensitively; canonical case is emitted
        kind: "boolean" parses true/false style values into bool, "date"
            accepts YYYY-MM-DD or MM/DD/YYYY and emits YYYY-MM-DD
        unique: Whether normalized values must be unique in file and database
        duplicate_label: Noun used in duplicate messages ("designation", "email")
        default: Record value used when an optional cell is blank

    Raises:
        re.error: If pattern is not a valid regular expression
    """
    name: str
    required: bool = False
    label: str = ""
    pattern: str | None = None
    format_message: str | None = None
    choices: tuple[str, ...] | None = None
    kind: FieldKind = "string"
    unique: bool = False
    duplicate_label: str | None = None
    default: Any = None
    _compiled: re.Pattern[str] | None = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self) -> None:
        if self.pattern is not None:
            object.__setattr__(self, "_compiled", re.compile(self.pattern))

    @property
    def display_label(self) -> str:
        if self.label:
            return self.label
        words = self.name.replace("_", " ")
        return words[:1].upper() + words[1:]

    @property
    def has_format_constraint(self) -> bool:
        return self.pattern is not None or self.choices is not None or self.kind != "string"

    @property
    def compiled_pattern(self) -> re.Pattern[str] | None:
        return self._compiled

    @staticmethod
    def from_dict(data: dict[str, Any]) -> FieldSpec:
        """Build a FieldSpec from a config mapping (already schema-validated)."""
        choices = data.get("choices")
        return FieldSpec(
            name=data["name"],
            required=bool(data.get("required", False)),
            label=data.get("label", ""),
            pattern=data.get("pattern"),
            format_message=data.get("format_message"),
            choices=tuple(choices) if choices else None,
            kind=data.get("kind", "string"),
            unique=bool(data.get("unique", False)),
            duplicate_label=data.get("duplicate_label"),
            default=data.get("default"),
        )


@dataclass(frozen=True)
class UniqueKey:
    """Columns whose combined normalized values must be unique.

    Attributes:
        fields: Column names forming the key, in message order
        label: Noun used in duplicate messages ("employee ID and title combination")
    """
    fields: tuple[str, ...]
    label: str = ""

    @property
    def name(self) -> str:
        """Error field name for the key, e.g. "employee_id+title"."""
        return "+".join(self.fields)

    @property
    def display_label(self) -> str:
        return self.label or " and ".join(self.fields) + " combination"

    @staticmethod
    def from_dict(data: dict[str, Any]) -> UniqueKey:
        return UniqueKey(fields=tuple(data["fields"]), label=data.get("label", ""))


@dataclass(frozen=True)
class EntitySchema:
    """Field schema for one importable entity type.

    Attributes:
        name: Entity key used on the command line ("job_role")
        label: Singular human noun ("job role"); default duplicate noun for unique fields
        plural: Plural stem used for export file names ("job_roles")
        fields: Ordered column definitions (also the export column order)
        template_rows: Illustrative rows for the downloadable template CSV
        unique_together: Composite keys checked like unique fields
    """
    name: str
    label: str
    plural: str
    fields: tuple[FieldSpec, ...]
    template_rows: tuple[dict[str, Any], ...] = field(default_factory=tuple)
    unique_together: tuple[UniqueKey, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        known = {f.name for f in self.fields}
        for key in self.unique_together:
            unknown = [c for c in key.fields if c not in known]
            if len(key.fields) < 2 or unknown:
                raise ValueError(
                    f"invalid composite key {key.name!r} for {self.name}: "
                    f"needs two or more known columns"
                )

    @property
    def columns(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required_columns(self) -> set[str]:
        return {f.name for f in self.fields if f.required}

    @property
    def unique_fields(self) -> list[FieldSpec]:
        return [f for f in self.fields if f.unique]

    def get_field(self, name: str) -> FieldSpec:
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def duplicate_noun(self, spec: FieldSpec) -> str:
        return spec.duplicate_label or self.label
