from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from bulk_import.services.progress import ProgressTracker, is_tty_enabled


def test_disabled_when_not_tty():
    with patch("bulk_import.services.progress.is_tty_enabled", return_value=False):
        tracker = ProgressTracker(2)
    assert tracker.enabled is False
    assert tracker.pbar is None
    tracker.start_file(Path("a.csv"))
    tracker.finish_file(valid=1, invalid=0)
    tracker.close()
    assert tracker.current_file == 1
    assert tracker.finished_files == 1


def test_enabled_creates_tqdm_bar():
    with patch("bulk_import.services.progress.tqdm") as mock_tqdm:
        with ProgressTracker(3, enabled=True) as tracker:
            tracker.start_file(Path("data/a.csv"))
            tracker.finish_file(valid=2, invalid=1)
        bar = mock_tqdm.return_value
        assert mock_tqdm.call_args.kwargs["total"] == 3
        bar.set_description.assert_any_call("Validating files (a.csv)")
        bar.update.assert_called_once_with(1)
        bar.set_postfix.assert_called_once_with(valid=2, invalid=1)
        bar.close.assert_called_once()
    assert tracker.pbar is None


def test_is_tty_enabled_reflects_stdout():
    with patch("sys.stdout") as out:
        out.isatty.return_value = True
        assert is_tty_enabled() is True
