"""Logging configuration driven by CLI verbosity.

setup_logging() maps the -v count to a log level and routes records either
to stderr or to a rotating log file.

Environment Variables:
    BOOK_CATALOG_LOG_FILE: Path to log file (disables stderr logging when set)
    LOG_FORMAT: Custom log format string
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_LOG_FORMAT = "[%(levelname)s] %(message)s"

LOG_FILE_ENV = "BOOK_CATALOG_LOG_FILE"

# Library loggers that stay quiet below -vvv
LIBRARY_LOGGERS = ("opentelemetry",)


def _level_for(verbose_count: int) -> int:
    if verbose_count >= 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbose_count: int = 0,
    log_file: str | None = None,
    log_format: str | None = None,
) -> None:
    """Configure the root logger for the given verbosity.

    Args:
        verbose_count: Number of -v flags.
            0: WARNING, 1: INFO, 2: DEBUG, 3+: DEBUG including library loggers.
        log_file: Path to a log file. Falls back to $BOOK_CATALOG_LOG_FILE.
        log_format: Custom format string. Falls back to $LOG_FORMAT.

    Example:
        >>> setup_logging(1)
        >>> setup_logging(2, log_file="/tmp/book-catalog.log")
    """
    level = _level_for(verbose_count)
    file_path = log_file or os.environ.get(LOG_FILE_ENV)
    fmt = log_format or os.environ.get("LOG_FORMAT")

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)

    if file_path:
        root_logger.addHandler(_file_handler(file_path, level, fmt))
    else:
        root_logger.addHandler(_console_handler(level, fmt))

    library_level = logging.DEBUG if verbose_count >= 3 else logging.WARNING
    for name in LIBRARY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def _console_handler(level: int, fmt: str | None = None) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or CONSOLE_LOG_FORMAT))
    return handler


def _file_handler(
    file_path: str,
    level: int,
    fmt: str | None = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Handler:
    """Build a rotating file handler, creating the parent directory.

    Args:
        file_path: Path to log file.
        level: Logging level.
        fmt: Optional custom format string.
        max_bytes: Size before rotation (default 10MB).
        backup_count: Rotated files to keep (default 5).
    """
    Path(file_path).parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        file_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_LOG_FORMAT, datefmt=DEFAULT_DATE_FORMAT))
    return handler


def get_logger(name: str) -> logging.Logger:
    """Get a logger for a module (typically ``__name__``)."""
    return logging.getLogger(name)
