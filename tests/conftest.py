"""Shared fixtures for book-catalog-tool tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from book_catalog_tool.catalog import Catalog
from book_catalog_tool.models import Book


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point ~ at a temporary directory so no test touches the real config."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("BOOK_CATALOG_FILE", raising=False)
    monkeypatch.delenv("BOOK_CATALOG_LOG_FILE", raising=False)
    monkeypatch.delenv("OTEL_ENABLED", raising=False)
    return home


@pytest.fixture(autouse=True)
def restore_root_logging() -> Generator[None]:
    """CLI invocations reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_book(**overrides: object) -> Book:
    """Create a valid Book, overriding any field."""
    fields: dict[str, object] = {
        "title": "Crime and Punishment",
        "author": "Dostoevsky",
        "year": 1866,
        "isbn": "978-5-389-07478-7",
        "genre": "Novel",
    }
    fields.update(overrides)
    return Book.model_validate(fields)


@pytest.fixture
def books() -> list[Book]:
    """Three valid books with distinct ISBNs."""
    return [
        make_book(),
        make_book(
            title="The Master and Margarita",
            author="Bulgakov",
            year=1967,
            isbn="978-5-389-07479-4",
        ),
        make_book(
            title="Clean Code",
            author="Robert C. Martin",
            year=2008,
            isbn="978-0-13-235088-4",
            genre="Programming",
        ),
    ]


@pytest.fixture
def catalog(books: list[Book]) -> Catalog:
    """A catalog holding the three sample books in order."""
    catalog = Catalog()
    for book in books:
        catalog.add(book)
    return catalog
