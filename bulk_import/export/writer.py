from __future__ import annotations

import io
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

import pandas as pd

from ..models.error_record import ValidationError
from ..models.field_schema import EntitySchema

"""CSV writers for export, template download and error reports.

All writers return CSV text with a header row and "\\n" line endings. Columns
of entity files follow the schema field order, which is also the column order
the import expects, so an exported file can be imported again as is.
"""

__all__ = [
    "ERROR_REPORT_COLUMNS",
    "format_cell",
    "export_records_csv",
    "template_csv",
    "error_report_csv",
    "export_file_name",
    "template_file_name",
]

ERROR_REPORT_COLUMNS = ["row", "field", "value", "message"]


def format_cell(value: Any) -> str:
    """Render one record value as CSV cell text (None -> '', bool -> true/false)."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _to_csv(columns: list[str], rows: list[list[str]]) -> str:
    df = pd.DataFrame(rows, columns=columns, dtype=str)
    buf = io.StringIO()
    df.to_csv(buf, index=False, lineterminator="\n")
    return buf.getvalue()


def export_records_csv(schema: EntitySchema, records: Iterable[Mapping[str, Any]]) -> str:
    """Serialize persisted or validated records to the entity's CSV layout.

    Keys not in the schema are ignored; missing keys export as empty cells.
    """
    columns = schema.columns
    rows = [[format_cell(rec.get(c)) for c in columns] for rec in records]
    return _to_csv(columns, rows)


def template_csv(schema: EntitySchema) -> str:
    """Downloadable template: header plus the schema's example rows."""
    return export_records_csv(schema, schema.template_rows)


def error_report_csv(errors: Iterable[ValidationError]) -> str:
    rows = [[str(e.row), e.field, e.value, e.message] for e in errors]
    return _to_csv(ERROR_REPORT_COLUMNS, rows)


def export_file_name(schema: EntitySchema, today: date | None = None) -> str:
    """File name for an export download, e.g. "job_types_2024-05-01.csv"."""
    day = today or date.today()
    return f"{schema.plural}_{day.isoformat()}.csv"


def template_file_name(schema: EntitySchema) -> str:
    return f"{schema.name}_template.csv"
