"""
Generic row validator for CSV bulk imports.

One validator serves every entity type: the EntitySchema decides which rules
apply. Rules run in phases per row:

1. required fields
2. format constraints (pattern, choices, boolean, date), skipped for blank values
3. uniqueness against the existing-records snapshot, then within the file,
   skipped for blank values and for values that failed their format check;
   composite keys follow single-column keys

A row with zero errors becomes exactly one normalized record; a row with any
error contributes only errors. Malformed data never raises.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..csvfile.reader import read_csv_rows
from ..models.error_record import ValidationError
from ..models.field_schema import EntitySchema
from ..models.row_data import RowData
from ..models.validation_result import ValidationResult
from .rules import (
    CompositeUniquenessRule,
    FieldRule,
    RequiredFieldRule,
    UniquenessRule,
    canonical_choice,
    format_rules_for,
    parse_boolean,
    parse_date,
)

__all__ = [
    "RowValidator",
    "build_record",
    "validate_rows",
    "validate_csv",
]

logger = logging.getLogger(__name__)


def build_record(schema: EntitySchema, row: RowData) -> dict[str, Any]:
    """Normalize a valid row into a record keyed by every schema field.

    Present values are trimmed, booleans parsed, dates rewritten as YYYY-MM-DD
    and choices canonicalized. Blank or absent optional values take the field
    default (None unless declared).
    """
    record: dict[str, Any] = {}
    for spec in schema.fields:
        value = row.trimmed(spec.name)
        if value == "":
            record[spec.name] = spec.default
        elif spec.kind == "boolean":
            record[spec.name] = parse_boolean(value)
        elif spec.kind == "date":
            parsed = parse_date(value)
            record[spec.name] = parsed.isoformat() if parsed else value
        elif spec.choices:
            record[spec.name] = canonical_choice(spec, value)
        else:
            record[spec.name] = value
    return record


class RowValidator:
    """
    Applies one entity schema to the rows of one file.

    Instances hold the in-file uniqueness state, so a RowValidator must not be
    reused across files; validate_rows() creates a fresh one per call.
    """

    def __init__(self, schema: EntitySchema, existing: Iterable[Mapping[str, Any]] = ()):
        self.schema = schema
        existing_records = list(existing)
        self.required_rules: list[FieldRule] = [
            RequiredFieldRule(schema, spec) for spec in schema.fields if spec.required
        ]
        self.format_rules: list[FieldRule] = []
        for spec in schema.fields:
            self.format_rules.extend(format_rules_for(schema, spec))
        self.unique_rules: list[UniquenessRule] = [
            UniquenessRule(schema, spec, existing_records) for spec in schema.unique_fields
        ]
        self.composite_rules: list[CompositeUniquenessRule] = [
            CompositeUniquenessRule(schema, key, existing_records) for key in schema.unique_together
        ]

    def check_row(self, row: RowData) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for rule in self.required_rules:
            errors.extend(rule.check(row))

        bad_format: set[str] = set()
        for rule in self.format_rules:
            found = rule.check(row)
            if found:
                bad_format.add(rule.field_name)
                errors.extend(found)

        for urule in self.unique_rules:
            if urule.field_name in bad_format:
                continue
            errors.extend(urule.check(row))
        for crule in self.composite_rules:
            if bad_format.intersection(crule.field_names):
                continue
            errors.extend(crule.check(row))
        return errors

    def validate(self, rows: Iterable[RowData | Mapping[str, str]]) -> ValidationResult:
        valid: list[dict[str, Any]] = []
        errors: list[ValidationError] = []
        row_data: dict[int, dict[str, str]] = {}
        total = 0

        for index, item in enumerate(rows):
            row = item if isinstance(item, RowData) else RowData.from_index(index, dict(item))
            total += 1
            row_errors = self.check_row(row)
            if row_errors:
                errors.extend(row_errors)
                row_data[row.row_number] = dict(row.values)
            else:
                valid.append(build_record(self.schema, row))

        result = ValidationResult(valid=valid, errors=errors, total_rows=total, row_data=row_data)
        logger.debug(
            f"validated entity={self.schema.name} rows={total} "
            f"valid={result.valid_count} invalid={result.invalid_count}"
        )
        return result


def validate_rows(
    schema: EntitySchema,
    rows: Iterable[RowData | Mapping[str, str]],
    existing: Iterable[Mapping[str, Any]] = (),
) -> ValidationResult:
    """Validate parsed rows against an entity schema.

    Args:
        schema: Entity field schema
        rows: RowData records, or plain column->value mappings numbered from row 2
        existing: Snapshot of already persisted records (column->value mappings)

    Returns:
        ValidationResult partitioning the rows into valid records and errors
    """
    return RowValidator(schema, existing).validate(rows)


def validate_csv(
    schema: EntitySchema,
    source: str | bytes | Path,
    existing: Iterable[Mapping[str, Any]] = (),
    encoding: str = "utf-8",
    strict_header: bool = False,
) -> ValidationResult:
    """Parse a CSV source and validate its rows.

    Raises:
        CSVParseError: The content could not be decoded or parsed. No partial
            result is produced in that case.
    """
    expected = schema.columns if strict_header else None
    data = read_csv_rows(source, encoding=encoding, expected_columns=expected)
    return validate_rows(schema, data.rows, existing)
