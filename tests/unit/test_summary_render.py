from __future__ import annotations

from datetime import UTC, datetime

from bulk_import.models.processing_result import FileStat, FileStatus, ProcessingResult
from bulk_import.services.summary import format_number, render_summary_line

T0 = datetime(2024, 1, 1, 10, 0, 0, tzinfo=UTC)
T1 = datetime(2024, 1, 1, 10, 0, 2, tzinfo=UTC)


def _result(stats: list[FileStat], elapsed: float = 2.0) -> ProcessingResult:
    return ProcessingResult(entity="designation", start_time=T0, end_time=T1, elapsed_seconds=elapsed, file_stats=stats)


def test_render_summary_line():
    stats = [
        FileStat("a.csv", FileStatus.CLEAN, total_rows=3, valid_rows=3),
        FileStat("b.csv", FileStatus.PARTIAL, total_rows=4, valid_rows=2, invalid_rows=2, error_count=3),
    ]
    assert render_summary_line(_result(stats)) == (
        "SUMMARY files=2/2 rows=7 valid=5 invalid=2 errors=3 elapsed_sec=2"
    )


def test_failed_file_counts_in_total_only():
    stats = [
        FileStat("a.csv", FileStatus.CLEAN, total_rows=1, valid_rows=1),
        FileStat("b.csv", FileStatus.FAILED, error="malformed"),
    ]
    line = render_summary_line(_result(stats, elapsed=0.5))
    assert line.startswith("SUMMARY files=1/2 rows=1 valid=1 invalid=0 errors=0")
    assert line.endswith("elapsed_sec=0.5")


def test_no_files():
    assert render_summary_line(_result([], elapsed=0)) == (
        "SUMMARY files=0/0 rows=0 valid=0 invalid=0 errors=0 elapsed_sec=0"
    )


def test_format_number():
    assert format_number(0) == "0"
    assert format_number(3.0) == "3"
    assert format_number(0.000123) == "0.000123"
    assert format_number(1.23456) == "1.235"
    assert "e" not in format_number(0.0000001)
