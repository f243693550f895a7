"""Labeled console logging and the JSON Lines error log."""

from .error_log import ErrorLogBuffer
from .init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "ErrorLogBuffer",
    "LabeledFormatter",
    "get_logger",
    "log_summary",
    "reset_logging",
    "set_debug",
    "setup_logging",
]
