"""Domain models for the CSV bulk import tool.

This package contains the row, schema, error and result models shared by the
reader, the validator, the exporters and the CLI.
"""

from .error_record import ErrorRecord, ErrorType, ValidationError
from .field_schema import EntitySchema, FieldSpec
from .processing_result import FileStat, FileStatus, ProcessingResult
from .row_data import ROW_NUMBER_OFFSET, RowData
from .validation_result import RowFailure, ValidationResult

__all__ = [
    # Schema models
    "EntitySchema",
    "FieldSpec",
    # Row / error models
    "RowData",
    "ROW_NUMBER_OFFSET",
    "ErrorType",
    "ValidationError",
    "ErrorRecord",
    # Result models
    "RowFailure",
    "ValidationResult",
    "FileStat",
    "FileStatus",
    "ProcessingResult",
]
