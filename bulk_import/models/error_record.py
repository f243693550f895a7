from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import Enum

"""Validation error models for the CSV bulk import tool.

ValidationError is the per-row, per-field outcome of a failed rule. It is
immutable once produced and carries everything a UI error table or an error
report CSV needs: row number, field, offending value and message.

ErrorRecord is the JSON Lines representation written to the error log. It
supports row=-1 as a sentinel value for file-level errors (parse failures)
where no row can be attributed.
"""

__all__ = [
    "ErrorType",
    "ValidationError",
    "ErrorRecord",
]


class ErrorType(str, Enum):
    """Row-level error classification (UPPER_SNAKE values)."""
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_FORMAT = "INVALID_FORMAT"
    DUPLICATE_IN_FILE = "DUPLICATE_IN_FILE"
    DUPLICATE_IN_DATABASE = "DUPLICATE_IN_DATABASE"


@dataclass(frozen=True)
class ValidationError:
    """One violated rule on one row.

    Attributes:
        row: Row number (header = 1, first data row = 2)
        field: Column name the rule applies to
        value: Offending value as found in the file ('' when absent)
        message: Human-readable message with the value interpolated
        error_type: ErrorType classification
    """
    row: int
    field: str
    value: str
    message: str
    error_type: ErrorType

    def to_dict(self) -> dict[str, object]:
        return {
            "row": self.row,
            "field": self.field,
            "value": self.value,
            "message": self.message,
            "error_type": self.error_type.value,
        }


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: CSV filename being processed
        entity: Entity type the file was validated as
        row: Row number. Use -1 for file-level errors where row is unknown
        field: Column name ('' for file-level errors)
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error message
    """
    timestamp: str  # ISO8601 UTC
    file: str
    entity: str
    row: int
    field: str
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(
        file: str, entity: str, row: int, field: str, error_type: str, message: str
    ) -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            entity=entity,
            row=row,
            field=field,
            error_type=error_type,
            message=message,
        )

    @staticmethod
    def from_validation_error(file: str, entity: str, error: ValidationError) -> ErrorRecord:
        return ErrorRecord.create(
            file=file,
            entity=entity,
            row=error.row,
            field=error.field,
            error_type=error.error_type.value,
            message=error.message,
        )

    def to_json_line(self) -> str:
        """Serialize ErrorRecord to JSON Lines format.

        Returns:
            JSON string representation without extra keys
        """
        return json.dumps(asdict(self), ensure_ascii=False)
