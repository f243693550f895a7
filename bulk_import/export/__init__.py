"""CSV export, template and error report writers."""

from .writer import (
    ERROR_REPORT_COLUMNS,
    error_report_csv,
    export_file_name,
    export_records_csv,
    format_cell,
    template_csv,
    template_file_name,
)

__all__ = [
    "ERROR_REPORT_COLUMNS",
    "format_cell",
    "export_records_csv",
    "template_csv",
    "error_report_csv",
    "export_file_name",
    "template_file_name",
]
