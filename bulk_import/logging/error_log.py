from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord, ValidationError

"""Error log buffering and JSON Lines output.

- Fixed schema per line: timestamp, file, entity, row, field, error_type, message
- One file per run: `<directory>/errors-YYYYMMDD-HHMMSS.log` (UTC), created on
  the first flush that has records to write
- Records are buffered and written per input file
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "DEFAULT_LOGS_DIR",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. flush() appends JSON Lines.

    Not thread safe; the importer processes files serially.
    """

    def __init__(self, directory: Path | str = DEFAULT_LOGS_DIR) -> None:
        self.directory = Path(directory)
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self.written = 0

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.directory / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def extend_validation_errors(
        self, file: str, entity: str, errors: list[ValidationError]
    ) -> None:
        for err in errors:
            self._records.append(ErrorRecord.from_validation_error(file, entity, err))

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records. Returns the log path, or None if nothing was ever written."""
        if not self._records:
            return self._file_path if self.written else None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self.written += len(self._records)
        self._records.clear()
        return fp
