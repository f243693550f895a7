"""
Row validation for CSV bulk imports.

Provides the field rules (required, pattern, choices, boolean, uniqueness) and
the generic validator that applies an entity schema to parsed rows.
"""

from .rules import (
    BooleanRule,
    ChoicesRule,
    FieldRule,
    PatternRule,
    RequiredFieldRule,
    UniquenessRule,
    normalize_key,
    parse_boolean,
)
from .validator import RowValidator, build_record, validate_csv, validate_rows

__all__ = [
    "FieldRule",
    "RequiredFieldRule",
    "PatternRule",
    "ChoicesRule",
    "BooleanRule",
    "UniquenessRule",
    "normalize_key",
    "parse_boolean",
    "RowValidator",
    "build_record",
    "validate_rows",
    "validate_csv",
]
