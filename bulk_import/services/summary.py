from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for the CSV bulk import tool.

Format:
SUMMARY files={parsed}/{total} rows={rows} valid={valid} invalid={invalid}
errors={errors} elapsed_sec={elapsed}

`parsed` counts the files that could be read and validated; files that
failed to parse are included in `total` only.
"""

__all__ = [
    "format_number",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Render a metric without scientific notation or a trailing '.0'."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line of a validate run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> render_summary_line(ProcessingResult("degree", t, t, 1.5))
        'SUMMARY files=0/0 rows=0 valid=0 invalid=0 errors=0 elapsed_sec=1.5'
    """
    total = result.total_files
    parsed = total - result.failed_files
    return (
        f"SUMMARY files={parsed}/{total} "
        f"rows={result.total_rows} "
        f"valid={result.valid_rows} "
        f"invalid={result.invalid_rows} "
        f"errors={result.error_count} "
        f"elapsed_sec={format_number(result.elapsed_seconds)}"
    )
