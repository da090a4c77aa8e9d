"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from book_catalog_tool.logging_config import get_logger, setup_logging


@pytest.mark.parametrize(
    ("verbose_count", "level"),
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (3, logging.DEBUG)],
)
def test_verbosity_maps_to_level(verbose_count: int, level: int) -> None:
    setup_logging(verbose_count)
    assert logging.getLogger().level == level


def test_library_loggers_only_verbose_at_trace_level() -> None:
    setup_logging(2)
    assert logging.getLogger("opentelemetry").level == logging.WARNING

    setup_logging(3)
    assert logging.getLogger("opentelemetry").level == logging.DEBUG


def test_log_file_replaces_console(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    log_file = tmp_path / "logs" / "catalog.log"
    monkeypatch.setenv("BOOK_CATALOG_LOG_FILE", str(log_file))

    setup_logging(1)
    get_logger("book_catalog_tool.test").info("hello from test")

    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], RotatingFileHandler)
    handlers[0].flush()
    assert "hello from test" in log_file.read_text(encoding="utf-8")
    handlers[0].close()
