"""CSV file reading (parse collaborator of the validator)."""

from .reader import (
    CsvData,
    CSVParseError,
    MissingColumnsError,
    decode_csv_content,
    normalize_frame,
    read_csv_frame,
    read_csv_rows,
)

__all__ = [
    "CsvData",
    "CSVParseError",
    "MissingColumnsError",
    "decode_csv_content",
    "normalize_frame",
    "read_csv_frame",
    "read_csv_rows",
]
