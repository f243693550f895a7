"""CSV bulk import validation for HR settings lists.

Public API::

    from bulk_import import get_entity_schema, validate_csv

    result = validate_csv(get_entity_schema("designation"), Path("designations.csv"))
    for failure in result.row_failures():
        print(failure.row, failure.messages)
"""

from .csvfile.reader import CSVParseError, MissingColumnsError, read_csv_rows
from .export.writer import error_report_csv, export_records_csv, template_csv
from .models.error_record import ErrorType, ValidationError
from .models.field_schema import EntitySchema, FieldSpec
from .models.validation_result import ValidationResult
from .schemas.registry import UnknownEntityError, get_entity_schema
from .services.existing import SnapshotCache, load_existing_records
from .validation.validator import validate_csv, validate_rows

__version__ = "0.1.0"

__all__ = [
    "CSVParseError",
    "EntitySchema",
    "ErrorType",
    "FieldSpec",
    "MissingColumnsError",
    "SnapshotCache",
    "UnknownEntityError",
    "ValidationError",
    "ValidationResult",
    "error_report_csv",
    "export_records_csv",
    "get_entity_schema",
    "load_existing_records",
    "read_csv_rows",
    "template_csv",
    "validate_csv",
    "validate_rows",
]
