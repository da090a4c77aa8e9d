"""Catalog persistence for book-catalog-tool.

Catalogs are stored as a versioned UTF-8 JSON document:

    {"format": "book-catalog", "version": 1, "books": [{...}, ...]}

Books are written in catalog order. Loading feeds every decoded book through
Catalog.add(), so validation and duplicate detection apply exactly as they do
for interactive input; entries that fail are skipped and logged.

Functions:
    encode_books: Serialize books to bytes.
    decode_books: Parse bytes into a list of raw book entries.
    save: Write a catalog to a file.
    load: Add the books stored in a file to a catalog.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError as ModelValidationError

from book_catalog_tool.catalog import Catalog
from book_catalog_tool.errors import (
    CatalogIOError,
    DuplicateError,
    FormatError,
    ValidationError,
)
from book_catalog_tool.logging_config import get_logger
from book_catalog_tool.models import Book
from book_catalog_tool.telemetry import TelemetryService, trace_span

logger = get_logger(__name__)

FORMAT_NAME = "book-catalog"
FORMAT_VERSION = 1
SUPPORTED_VERSIONS = (1,)


@dataclass
class LoadResult:
    """Outcome of a best-effort load.

    Attributes:
        loaded: Books added to the catalog.
        skipped: Entries rejected (malformed, invalid or duplicate).
    """

    loaded: int = 0
    skipped: int = 0


def encode_books(books: Iterable[Book]) -> bytes:
    """Serialize books, in the given order, to the catalog file format."""
    document = {
        "format": FORMAT_NAME,
        "version": FORMAT_VERSION,
        "books": [book.model_dump(mode="json") for book in books],
    }
    return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")


def decode_books(data: bytes, path: Path | None = None) -> list[Any]:
    """Parse catalog file content.

    Only the document envelope is checked here. Individual entries are
    returned as-is and validated (in pydantic strict mode, so no type
    coercion) when they are added to a catalog.

    Args:
        data: Raw file content.
        path: Source file, for error messages.

    Returns:
        The raw entries of the ``books`` list.

    Raises:
        FormatError: If the content is not a catalog document.
    """
    try:
        document = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise FormatError(f"not UTF-8 text ({e.reason})", path) from e
    except json.JSONDecodeError as e:
        raise FormatError(f"invalid JSON ({e.msg} at line {e.lineno})", path) from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals and pathologically deep nesting
        raise FormatError(f"undecodable JSON ({type(e).__name__}: {e})", path) from e

    if not isinstance(document, dict):
        raise FormatError("top level is not a JSON object", path)
    if document.get("format") != FORMAT_NAME:
        raise FormatError(f"missing or unknown format tag {document.get('format')!r}", path)
    version = document.get("version")
    if version not in SUPPORTED_VERSIONS:
        raise FormatError(f"unsupported version {version!r}", path)
    books = document.get("books")
    if not isinstance(books, list):
        raise FormatError("'books' is not a list", path)
    return books


def save(catalog: Catalog, destination: str | Path) -> None:
    """Write every book in the catalog to ``destination``.

    Parent directories are created as needed. An existing file is replaced.

    Args:
        catalog: Catalog to save.
        destination: Target file.

    Raises:
        CatalogIOError: If the file cannot be written.

    Example:
        >>> save(catalog, Path("~/books.json").expanduser())
    """
    path = Path(destination)
    books = catalog.list()
    with trace_span("catalog.save", {"catalog.path": str(path)}) as span:
        data = encode_books(books)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            logger.error("Failed to save catalog to %s: %s", path, e)
            raise CatalogIOError(path, e) from e
        if span:
            span.set_attribute("catalog.books", len(books))
    logger.info("Saved %d books to %s", len(books), path)


def load(catalog: Catalog, source: str | Path) -> LoadResult:
    """Add the books stored in ``source`` to ``catalog``.

    Entries that are malformed, fail validation or duplicate an ISBN already
    in the catalog are skipped; the rest are added in file order.

    Args:
        catalog: Catalog to add books to.
        source: Catalog file to read.

    Returns:
        Counts of loaded and skipped entries.

    Raises:
        CatalogIOError: If the file cannot be read.
        FormatError: If the file is not a catalog document.
    """
    path = Path(source)
    result = LoadResult()
    with trace_span("catalog.load", {"catalog.path": str(path)}) as span:
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            logger.error("Failed to read catalog from %s: %s", path, e)
            raise CatalogIOError(path, e) from e

        for index, entry in enumerate(decode_books(data, path)):
            if _load_entry(catalog, entry, index, path):
                result.loaded += 1
            else:
                result.skipped += 1

        if span:
            span.set_attribute("catalog.loaded", result.loaded)
            span.set_attribute("catalog.skipped", result.skipped)

    TelemetryService.get_instance().record_operation("load", "ok")
    logger.info(
        "Loaded %d books from %s (skipped %d)",
        result.loaded,
        path,
        result.skipped,
    )
    return result


def _load_entry(catalog: Catalog, entry: Any, index: int, path: Path) -> bool:
    if not isinstance(entry, dict):
        logger.warning("Skipping entry %d in %s: not a JSON object", index, path)
        return False
    try:
        catalog.add(Book.model_validate(entry, strict=True))
    except ModelValidationError as e:
        logger.warning(
            "Skipping entry %d in %s: %d malformed field(s)",
            index,
            path,
            e.error_count(),
        )
        return False
    except (ValidationError, DuplicateError) as e:
        logger.warning("Skipping entry %d in %s: %s", index, path, e)
        return False
    return True
