"""Run-level services: file processing, snapshot cache, progress and summary."""

from .existing import SnapshotCache, SnapshotError, load_existing_records
from .importer import ImportProcessingError, check_paths, process_file, process_files
from .progress import ProgressTracker, is_tty_enabled
from .summary import render_summary_line

__all__ = [
    "ImportProcessingError",
    "ProgressTracker",
    "SnapshotCache",
    "SnapshotError",
    "check_paths",
    "is_tty_enabled",
    "load_existing_records",
    "process_file",
    "process_files",
    "render_summary_line",
]
