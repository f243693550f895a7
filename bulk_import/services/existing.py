from __future__ import annotations

import json
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from ..csvfile.reader import CSVParseError, read_csv_rows

"""Existing-records snapshot loading and caching.

The snapshot is the list of records already persisted for an entity type.
Uniqueness checks only need to read it, so it is loaded once per run and
shared across files. Accepted sources are a CSV file (for example a previous
export) and a JSON file holding an array of objects.
"""

__all__ = [
    "SnapshotError",
    "load_existing_records",
    "SnapshotCache",
]


class SnapshotError(Exception):
    """Raised when the existing-records file cannot be loaded."""


def _load_json(path: Path, encoding: str) -> list[dict[str, Any]]:
    try:
        data = json.loads(path.read_text(encoding=encoding))
    except OSError as e:
        raise SnapshotError(f"unable to read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SnapshotError(f"invalid JSON in {path}: {e}") from e
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise SnapshotError(f"{path} must contain a JSON array of objects")
    return data


def load_existing_records(path: Path, encoding: str = "utf-8") -> list[dict[str, Any]]:
    """Load persisted records from a .json array or a CSV file.

    Raises:
        SnapshotError: The file is missing or its content is not usable
    """
    if not path.exists():
        raise SnapshotError(f"existing records file not found: {path}")
    if path.suffix.lower() == ".json":
        return _load_json(path, encoding)
    try:
        data = read_csv_rows(path, encoding=encoding)
    except CSVParseError as e:
        raise SnapshotError(f"unable to parse {path}: {e}") from e
    return [dict(r.values) for r in data.rows]


class SnapshotCache:
    """Caller-owned lazy holder of one existing-records snapshot.

    get() runs the loader on first use only (thread safe); reset() discards
    the cached records so the next get() reloads them.
    """

    def __init__(self, loader: Callable[[], list[dict[str, Any]]]) -> None:
        self._loader = loader
        self._records: list[dict[str, Any]] | None = None
        self._lock = threading.Lock()
        self.load_count = 0

    @classmethod
    def from_path(cls, path: Path, encoding: str = "utf-8") -> SnapshotCache:
        return cls(lambda: load_existing_records(path, encoding=encoding))

    @property
    def loaded(self) -> bool:
        return self._records is not None

    def get(self) -> list[dict[str, Any]]:
        if self._records is None:
            with self._lock:
                if self._records is None:
                    self._records = list(self._loader())
                    self.load_count += 1
        return self._records

    def reset(self) -> None:
        with self._lock:
            self._records = None
