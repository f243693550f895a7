from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display over input files with tqdm (TTY only).

A single tqdm bar is shown when stdout is a terminal. In non-TTY environments
(CI, pipes, tests) the tracker is a no-op so that no ANSI control sequences
end up in captured output.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar, usable as a context manager."""

    def __init__(
        self,
        total_files: int,
        *,
        description: str = "Validating files",
        enabled: bool | None = None,
    ) -> None:
        """
        Args:
            total_files: Total number of files to process
            description: Description for the progress bar
            enabled: Force the bar on or off; defaults to TTY detection
        """
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.finished_files = 0

        self.enabled = is_tty_enabled() if enabled is None else enabled
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, valid: int = 0, invalid: int = 0) -> None:
        """Advance the bar and show running valid/invalid row counts."""
        self.finished_files += 1
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)
            self.pbar.set_postfix(valid=valid, invalid=invalid)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
