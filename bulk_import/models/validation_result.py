from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .error_record import ErrorType, ValidationError

"""Validation result models for the CSV bulk import tool.

ValidationResult is the partition of one file's rows into valid records and
validation errors. RowFailure groups the errors of a single row together with
the row's original data, which is the shape an import dialog error table
renders ({row, errors[], data}).
"""

__all__ = [
    "RowFailure",
    "ValidationResult",
]


@dataclass(frozen=True)
class RowFailure:
    """All errors of one invalid row."""
    row: int
    errors: list[ValidationError]
    data: dict[str, str]

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating one file.

    Attributes:
        valid: Normalized records ready for bulk insert, in row order
        errors: Validation errors in row order, then rule-check order
        total_rows: Number of data rows that were validated
        row_data: Original values of invalid rows keyed by row number
    """
    valid: list[dict[str, Any]]
    errors: list[ValidationError]
    total_rows: int
    row_data: dict[int, dict[str, str]] = field(default_factory=dict)

    @property
    def invalid_rows(self) -> list[int]:
        """Distinct row numbers that produced at least one error, in order."""
        return list(dict.fromkeys(e.row for e in self.errors))

    @property
    def valid_count(self) -> int:
        return len(self.valid)

    @property
    def invalid_count(self) -> int:
        return len(self.invalid_rows)

    @property
    def is_clean(self) -> bool:
        return not self.errors

    def errors_of_type(self, error_type: ErrorType) -> list[ValidationError]:
        return [e for e in self.errors if e.error_type == error_type]

    def row_failures(self) -> list[RowFailure]:
        """Group errors by row for rendering."""
        grouped: dict[int, list[ValidationError]] = {}
        for err in self.errors:
            grouped.setdefault(err.row, []).append(err)
        return [
            RowFailure(row=row, errors=errs, data=self.row_data.get(row, {}))
            for row, errs in grouped.items()
        ]
