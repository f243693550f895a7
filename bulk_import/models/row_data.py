from __future__ import annotations

from dataclasses import dataclass, field

"""RowData model for the CSV bulk import tool.

RowData represents a single data row of a parsed CSV file, before validation.
Values are kept as the raw strings produced by the CSV parser; a column that
is missing from the header is simply absent from ``values``.
"""

__all__ = [
    "RowData",
    "ROW_NUMBER_OFFSET",
]

# Header is line 1, so the first data row (index 0) is reported as row 2.
ROW_NUMBER_OFFSET = 2


@dataclass(frozen=True)
class RowData:
    """Logical representation of a single CSV data row.

    The row_number refers to the line of the file as a spreadsheet user sees it
    (header = 1, first data row = 2).
    """
    row_number: int
    values: dict[str, str] = field(default_factory=dict)

    @staticmethod
    def from_index(index: int, values: dict[str, str]) -> RowData:
        """Build a RowData from a 0-based data row index."""
        return RowData(row_number=index + ROW_NUMBER_OFFSET, values=values)

    def get(self, column: str) -> str | None:
        return self.values.get(column)

    def trimmed(self, column: str) -> str:
        """Return the stripped value of a column ('' when absent or None)."""
        raw = self.values.get(column)
        if raw is None:
            return ""
        return str(raw).strip()
