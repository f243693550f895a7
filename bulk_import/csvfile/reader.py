from __future__ import annotations

import io
import warnings
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from ..models.row_data import RowData

"""CSV reader for bulk import files.

The first line of the file is the header; every following non-empty line is a
data row, including lines made only of delimiters (",,,"). All values are read
as strings: pandas' default NaN conversion is disabled so that literal strings
such as "NA" or "null" reach the validator unchanged. Fields beyond the header
width are ignored.

Failures to decode or tokenize the file raise CSVParseError. These abort the
import of that file; data-quality problems are never raised here.
"""

__all__ = [
    "CSVParseError",
    "MissingColumnsError",
    "CsvData",
    "decode_csv_content",
    "read_csv_frame",
    "normalize_frame",
    "read_csv_rows",
]


class CSVParseError(Exception):
    """Raised when the file cannot be decoded or parsed into rows at all."""


class MissingColumnsError(CSVParseError):
    """Raised when expected columns are missing from the header."""


@dataclass
class CsvData:
    columns: list[str]
    rows: list[RowData]  # data rows in file order


CsvSource = str | bytes | Path


def decode_csv_content(content: bytes, encoding: str = "utf-8") -> str:
    """Decode raw file bytes, dropping a UTF-8 byte order mark if present."""
    codec = "utf-8-sig" if encoding.lower().replace("_", "-") in ("utf-8", "utf8") else encoding
    try:
        return content.decode(codec)
    except (UnicodeDecodeError, LookupError) as e:
        raise CSVParseError(f"unable to decode CSV content as {encoding}: {e}") from e


def _load_text(source: CsvSource, encoding: str) -> str:
    if isinstance(source, Path):
        try:
            content = source.read_bytes()
        except OSError as e:
            raise CSVParseError(f"unable to read {source}: {e}") from e
        return decode_csv_content(content, encoding)
    if isinstance(source, bytes):
        return decode_csv_content(source, encoding)
    return source.lstrip("\ufeff")


def read_csv_frame(source: CsvSource, encoding: str = "utf-8") -> pd.DataFrame:
    """Read CSV content into a DataFrame of strings.

    Parameters
    ----------
    source: file path, raw bytes or already decoded text
    encoding: text encoding used for paths and bytes
    """
    text = _load_text(source, encoding)
    try:
        with warnings.catch_warnings():
            # index_col=False drops fields beyond the header; pandas warns about that
            warnings.simplefilter("ignore", pd.errors.ParserWarning)
            return pd.read_csv(
                io.StringIO(text),
                dtype=str,
                index_col=False,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
            )
    except pd.errors.EmptyDataError as e:
        raise CSVParseError("CSV file is empty (no header row)") from e
    except pd.errors.ParserError as e:
        raise CSVParseError(f"malformed CSV: {e}") from e


def normalize_frame(
    df: pd.DataFrame,
    expected_columns: Iterable[str] | None = None,
) -> CsvData:
    """Turn a string DataFrame into RowData records.

    Steps:
    1. Strip header names
    2. Validate expected columns subset (when given)
    3. Number rows from 2 (header is row 1); rows whose cells are all blank
       are kept so the validator reports them
    """
    columns = [str(c).strip() for c in df.columns]

    if expected_columns is not None:
        missing = set(expected_columns) - set(columns)
        if missing:
            raise MissingColumnsError(f"CSV header missing columns: {sorted(missing)}")

    rows: list[RowData] = []
    for raw in df.itertuples(index=False, name=None):
        values: dict[str, str] = {}
        for col, val in zip(columns, raw, strict=False):
            # short lines leave trailing cells as NaN even with na_filter off
            values[col] = "" if pd.isna(val) else str(val)
        rows.append(RowData.from_index(len(rows), values))
    return CsvData(columns=columns, rows=rows)


def read_csv_rows(
    source: CsvSource,
    encoding: str = "utf-8",
    expected_columns: Iterable[str] | None = None,
) -> CsvData:
    """Read and normalize a CSV file in one step."""
    df = read_csv_frame(source, encoding=encoding)
    return normalize_frame(df, expected_columns=expected_columns)
