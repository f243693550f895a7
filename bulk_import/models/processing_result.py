from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .validation_result import ValidationResult

"""Processing result models for the CSV bulk import tool.

These aggregate per-file validation outcomes into the figures the SUMMARY
line and the exit code are derived from.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Per-file outcome.

    - CLEAN: every row valid
    - PARTIAL: at least one invalid row
    - FAILED: file could not be read or parsed (no rows validated)
    """
    CLEAN = "clean"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics."""
    file_name: str
    status: FileStatus
    total_rows: int = 0
    valid_rows: int = 0
    invalid_rows: int = 0
    error_count: int = 0
    elapsed_seconds: float = 0.0
    result: ValidationResult | None = None  # None when FAILED
    error: str | None = None  # failure reason when FAILED


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one `validate` run over one or more files."""
    entity: str
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] = field(default_factory=list)

    @property
    def total_files(self) -> int:
        return len(self.file_stats)

    @property
    def failed_files(self) -> int:
        return sum(1 for s in self.file_stats if s.status == FileStatus.FAILED)

    @property
    def total_rows(self) -> int:
        return sum(s.total_rows for s in self.file_stats)

    @property
    def valid_rows(self) -> int:
        return sum(s.valid_rows for s in self.file_stats)

    @property
    def invalid_rows(self) -> int:
        return sum(s.invalid_rows for s in self.file_stats)

    @property
    def error_count(self) -> int:
        return sum(s.error_count for s in self.file_stats)

    def valid_records(self) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for s in self.file_stats:
            if s.result is not None:
                records.extend(s.result.valid)
        return records
