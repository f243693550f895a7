from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..csvfile.reader import CSVParseError, MissingColumnsError
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.field_schema import EntitySchema
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..validation.validator import validate_csv
from .existing import SnapshotCache, SnapshotError
from .progress import ProgressTracker

"""File-level orchestration of a validate run.

Validates one or more CSV files against one entity schema and aggregates the
per-file outcomes into a ProcessingResult. Every file gets a fresh in-file
duplicate set; the existing-records snapshot is loaded at most once and
shared by all files.

A file that cannot be parsed is recorded as FAILED (with a row=-1 entry in
the error log) and processing continues with the next file. A path that does
not exist aborts the run before any file is read.
"""

__all__ = [
    "ImportProcessingError",
    "PARSE_ERROR",
    "MISSING_COLUMNS",
    "check_paths",
    "process_file",
    "process_files",
]

logger = logging.getLogger(__name__)

# error_type values of file-level error log entries
PARSE_ERROR = "PARSE_ERROR"
MISSING_COLUMNS = "MISSING_COLUMNS"


class ImportProcessingError(Exception):
    """Fatal error that prevents the run from starting or continuing."""


def check_paths(paths: Iterable[Path]) -> list[Path]:
    """
    Raises:
        ImportProcessingError: If a path does not exist or is not a file
    """
    checked: list[Path] = []
    for p in paths:
        if not p.exists():
            raise ImportProcessingError(f"file not found: {p}")
        if not p.is_file():
            raise ImportProcessingError(f"not a file: {p}")
        checked.append(p)
    return checked


def process_file(
    schema: EntitySchema,
    path: Path,
    existing: Iterable[Mapping[str, Any]] = (),
    *,
    encoding: str = "utf-8",
    strict_header: bool = False,
    error_log: ErrorLogBuffer | None = None,
) -> FileStat:
    started = time.perf_counter()
    try:
        result = validate_csv(
            schema, path, existing, encoding=encoding, strict_header=strict_header
        )
    except CSVParseError as e:
        elapsed = time.perf_counter() - started
        error_type = MISSING_COLUMNS if isinstance(e, MissingColumnsError) else PARSE_ERROR
        logger.error(f"file={path.name} {e}")
        if error_log is not None:
            error_log.append(
                ErrorRecord.create(
                    file=path.name,
                    entity=schema.name,
                    row=-1,
                    field="",
                    error_type=error_type,
                    message=str(e),
                )
            )
        return FileStat(
            file_name=path.name,
            status=FileStatus.FAILED,
            elapsed_seconds=elapsed,
            error=str(e),
        )

    elapsed = time.perf_counter() - started
    if error_log is not None:
        error_log.extend_validation_errors(path.name, schema.name, result.errors)
    status = FileStatus.CLEAN if result.is_clean else FileStatus.PARTIAL
    logger.info(
        f"file={path.name} rows={result.total_rows} valid={result.valid_count} "
        f"invalid={result.invalid_count}"
    )
    return FileStat(
        file_name=path.name,
        status=status,
        total_rows=result.total_rows,
        valid_rows=result.valid_count,
        invalid_rows=result.invalid_count,
        error_count=len(result.errors),
        elapsed_seconds=elapsed,
        result=result,
    )


def process_files(
    schema: EntitySchema,
    paths: Iterable[Path],
    snapshot: SnapshotCache | None = None,
    *,
    encoding: str = "utf-8",
    strict_header: bool = False,
    error_log: ErrorLogBuffer | None = None,
    progress: bool | None = None,
) -> ProcessingResult:
    """Validate every file and aggregate the outcome.

    Args:
        schema: Entity schema all files are validated against
        paths: CSV files, processed in the given order
        snapshot: Existing-records cache shared by all files (None = no snapshot)
        encoding: Text encoding of the input files
        strict_header: Treat missing schema columns as a parse failure
        error_log: Buffer receiving one JSON Lines record per error (flushed per file)
        progress: Force the progress bar on/off (default: TTY detection)

    Raises:
        ImportProcessingError: A path is missing, or the snapshot cannot be loaded
    """
    file_paths = check_paths(paths)
    start_time = datetime.now(UTC)
    started = time.perf_counter()

    existing: list[Mapping[str, Any]] = []
    if snapshot is not None:
        try:
            existing = snapshot.get()
        except SnapshotError as e:
            raise ImportProcessingError(str(e)) from e
        logger.debug(f"existing snapshot records={len(existing)}")

    file_stats: list[FileStat] = []
    valid_total = 0
    invalid_total = 0
    with ProgressTracker(len(file_paths), enabled=progress) as tracker:
        for path in file_paths:
            tracker.start_file(path)
            stat = process_file(
                schema,
                path,
                existing,
                encoding=encoding,
                strict_header=strict_header,
                error_log=error_log,
            )
            file_stats.append(stat)
            if error_log is not None:
                error_log.flush()
            valid_total += stat.valid_rows
            invalid_total += stat.invalid_rows
            tracker.finish_file(valid=valid_total, invalid=invalid_total)

    return ProcessingResult(
        entity=schema.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        elapsed_seconds=time.perf_counter() - started,
        file_stats=file_stats,
    )
