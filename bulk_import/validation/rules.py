"""
Field rules applied by the bulk import validator.

Each rule checks one column of one row and reports a ValidationError instead of
raising, so that every violated rule of a row is collected. Rules are grouped
in phases (required, format, uniqueness); the validator runs all rules of one
phase before the next.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from ..models.error_record import ErrorType, ValidationError
from ..models.field_schema import EntitySchema, FieldSpec, UniqueKey
from ..models.row_data import RowData

__all__ = [
    "TRUE_VALUES",
    "FALSE_VALUES",
    "DATE_FORMATS",
    "normalize_key",
    "parse_boolean",
    "parse_date",
    "FieldRule",
    "RequiredFieldRule",
    "PatternRule",
    "ChoicesRule",
    "BooleanRule",
    "DateRule",
    "UniquenessRule",
    "CompositeUniquenessRule",
    "canonical_choice",
    "format_rules_for",
]

TRUE_VALUES = frozenset({"true", "yes", "y", "1"})
FALSE_VALUES = frozenset({"false", "no", "n", "0"})
DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y")


def normalize_key(value: str) -> str:
    """Uniqueness key: trimmed, lowercased."""
    return value.strip().lower()


def parse_boolean(value: str) -> bool | None:
    """Parse a boolean cell. Returns None when the value is not recognized."""
    v = value.strip().lower()
    if v in TRUE_VALUES:
        return True
    if v in FALSE_VALUES:
        return False
    return None


def parse_date(value: str) -> date | None:
    """Parse a date cell in one of DATE_FORMATS. Returns None when it does not parse."""
    v = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            continue
    return None


class FieldRule(ABC):
    """
    Base class for a rule bound to one field of one entity schema.
    """

    error_type: ErrorType

    def __init__(self, schema: EntitySchema, spec: FieldSpec):
        self.schema = schema
        self.spec = spec

    @property
    def field_name(self) -> str:
        return self.spec.name

    def _error(self, row: RowData, value: str, message: str) -> ValidationError:
        return ValidationError(
            row=row.row_number,
            field=self.spec.name,
            value=value,
            message=message,
            error_type=self.error_type,
        )

    @abstractmethod
    def check(self, row: RowData) -> list[ValidationError]:
        """
        Check the rule against one row.

        Returns:
            Errors produced by this rule (empty when the row passes)
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(field={self.spec.name})"


class RequiredFieldRule(FieldRule):
    """Fails when the trimmed value is empty or the column is absent."""

    error_type = ErrorType.MISSING_REQUIRED_FIELD

    def check(self, row: RowData) -> list[ValidationError]:
        if row.trimmed(self.spec.name) != "":
            return []
        raw = row.get(self.spec.name) or ""
        return [self._error(row, raw, f"{self.spec.display_label} is required")]


class _FormatRule(FieldRule):
    """Format rules are skipped for blank values."""

    error_type = ErrorType.INVALID_FORMAT

    def check(self, row: RowData) -> list[ValidationError]:
        value = row.trimmed(self.spec.name)
        if value == "" or self.accepts(value):
            return []
        return [self._error(row, value, self.message(value))]

    @abstractmethod
    def accepts(self, value: str) -> bool:
        ...

    @abstractmethod
    def message(self, value: str) -> str:
        ...


class PatternRule(_FormatRule):
    """Value must fully match the field's regular expression."""

    def __init__(self, schema: EntitySchema, spec: FieldSpec):
        super().__init__(schema, spec)
        pattern = spec.compiled_pattern
        if pattern is None:
            raise ValueError(f"PatternRule requires a pattern for field '{spec.name}'")
        self.pattern = pattern

    def accepts(self, value: str) -> bool:
        return self.pattern.fullmatch(value) is not None

    def message(self, value: str) -> str:
        if self.spec.format_message:
            return self.spec.format_message
        return f"{self.spec.display_label} has an invalid format: '{value}'"


class ChoicesRule(_FormatRule):
    """Value must be one of the declared choices (case insensitive)."""

    def accepts(self, value: str) -> bool:
        return canonical_choice(self.spec, value) is not None

    def message(self, value: str) -> str:
        allowed = ", ".join(self.spec.choices or ())
        return f"{self.spec.display_label} must be one of: {allowed} (case insensitive)"


class BooleanRule(_FormatRule):
    """Value must be a recognizable true/false token."""

    def accepts(self, value: str) -> bool:
        return parse_boolean(value) is not None

    def message(self, value: str) -> str:
        return f"{self.spec.display_label} must be true or false"


class DateRule(_FormatRule):
    """Value must be a calendar date in YYYY-MM-DD or MM/DD/YYYY form."""

    def accepts(self, value: str) -> bool:
        return parse_date(value) is not None

    def message(self, value: str) -> str:
        if self.spec.format_message:
            return self.spec.format_message
        return f"{self.spec.display_label} must be a valid date (YYYY-MM-DD or MM/DD/YYYY)"


def canonical_choice(spec: FieldSpec, value: str) -> str | None:
    lowered = value.strip().lower()
    for choice in spec.choices or ():
        if choice.lower() == lowered:
            return choice
    return None


def format_rules_for(schema: EntitySchema, spec: FieldSpec) -> list[FieldRule]:
    rules: list[FieldRule] = []
    if spec.kind == "boolean":
        rules.append(BooleanRule(schema, spec))
    elif spec.kind == "date":
        rules.append(DateRule(schema, spec))
    if spec.choices:
        rules.append(ChoicesRule(schema, spec))
    if spec.pattern is not None:
        rules.append(PatternRule(schema, spec))
    return rules


class UniquenessRule(FieldRule):
    """
    Rejects values already persisted or already seen earlier in the same file.

    The rule is stateful: one instance lives for exactly one validation call.
    The first in-file occurrence of a key marks it as seen even when the row
    fails for other reasons; every occurrence of a persisted key is flagged.
    """

    error_type = ErrorType.DUPLICATE_IN_DATABASE

    def __init__(
        self,
        schema: EntitySchema,
        spec: FieldSpec,
        existing: Iterable[Mapping[str, Any]] = (),
    ):
        super().__init__(schema, spec)
        self.existing_keys: set[str] = set()
        for record in existing:
            value = record.get(spec.name)
            if value is None:
                continue
            key = normalize_key(str(value))
            if key:
                self.existing_keys.add(key)
        self.seen_keys: set[str] = set()

    def check(self, row: RowData) -> list[ValidationError]:
        value = row.trimmed(self.spec.name)
        if value == "":
            return []
        key = normalize_key(value)
        noun = self.schema.duplicate_noun(self.spec)
        errors: list[ValidationError] = []
        if key in self.existing_keys:
            errors.append(
                ValidationError(
                    row=row.row_number,
                    field=self.spec.name,
                    value=value,
                    message=f'{noun[:1].upper()}{noun[1:]} "{value}" already exists',
                    error_type=ErrorType.DUPLICATE_IN_DATABASE,
                )
            )
        if key in self.seen_keys:
            errors.append(
                ValidationError(
                    row=row.row_number,
                    field=self.spec.name,
                    value=value,
                    message=f'Duplicate {noun} "{value}" found in CSV',
                    error_type=ErrorType.DUPLICATE_IN_FILE,
                )
            )
        else:
            self.seen_keys.add(key)
        return errors


class CompositeUniquenessRule:
    """
    Uniqueness over a combination of columns (e.g. employee ID plus title).

    Behaves like UniquenessRule with a tuple key: skipped when any part is
    blank, persisted combinations are flagged on every occurrence and the first
    in-file occurrence marks the combination as seen.
    """

    def __init__(
        self,
        schema: EntitySchema,
        key: UniqueKey,
        existing: Iterable[Mapping[str, Any]] = (),
    ):
        self.schema = schema
        self.key = key
        self.existing_keys: set[tuple[str, ...]] = set()
        for record in existing:
            parts = tuple(normalize_key(str(record.get(c) or "")) for c in key.fields)
            if all(parts):
                self.existing_keys.add(parts)
        self.seen_keys: set[tuple[str, ...]] = set()

    @property
    def field_names(self) -> tuple[str, ...]:
        return self.key.fields

    def check(self, row: RowData) -> list[ValidationError]:
        values = [row.trimmed(c) for c in self.key.fields]
        if any(v == "" for v in values):
            return []
        parts = tuple(normalize_key(v) for v in values)
        shown = "-".join(values)
        label = self.key.display_label
        errors: list[ValidationError] = []
        if parts in self.existing_keys:
            errors.append(
                ValidationError(
                    row=row.row_number,
                    field=self.key.name,
                    value=shown,
                    message=f'{label[:1].upper()}{label[1:]} "{shown}" already exists',
                    error_type=ErrorType.DUPLICATE_IN_DATABASE,
                )
            )
        if parts in self.seen_keys:
            errors.append(
                ValidationError(
                    row=row.row_number,
                    field=self.key.name,
                    value=shown,
                    message=f'Duplicate {label} "{shown}" found in CSV',
                    error_type=ErrorType.DUPLICATE_IN_FILE,
                )
            )
        else:
            self.seen_keys.add(parts)
        return errors

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={self.key.name})"
