"""In-memory catalog store for book-catalog-tool.

The Catalog keeps books in an insertion-ordered dict keyed by normalized
ISBN and is the only place where book fields are validated. Every mutation
either fully succeeds or leaves the catalog unchanged.

Classes:
    Catalog: Ordered ISBN-keyed book store with add/update/get/list/search.
"""

from __future__ import annotations

from collections.abc import Iterator

from book_catalog_tool.errors import DuplicateError, NotFoundError, ValidationError
from book_catalog_tool.logging_config import get_logger
from book_catalog_tool.models import (
    Book,
    normalize_isbn,
    validate_isbn,
    validate_not_blank,
    validate_year,
)
from book_catalog_tool.telemetry import TelemetryService

logger = get_logger(__name__)


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_book(book: Book) -> None:
    """Check a book against the catalog field rules.

    Args:
        book: Book to check.

    Raises:
        ValidationError: On the first field that fails, naming that field.
    """
    checks = (
        ("title", lambda: validate_not_blank(book.title, "title")),
        ("author", lambda: validate_not_blank(book.author, "author")),
        ("year", lambda: validate_year(book.year)),
        ("isbn", lambda: validate_isbn(book.isbn)),
    )
    for field_name, check in checks:
        try:
            check()
        except ValueError as e:
            raise ValidationError(field_name, str(e), isbn=book.isbn) from e


class Catalog:
    """Ordered collection of books keyed by normalized ISBN.

    Iteration order is insertion order. update() re-inserts the edited book,
    which moves it to the end.

    Example:
        >>> catalog = Catalog()
        >>> catalog.add(Book(title="Clean Code", author="Robert C. Martin",
        ...                  year=2008, isbn="978-0-13-235088-4"))
        >>> catalog.get("9780132350884").title
        'Clean Code'
    """

    def __init__(self) -> None:
        self._books: dict[str, Book] = {}

    def __len__(self) -> int:
        return len(self._books)

    def __iter__(self) -> Iterator[Book]:
        return iter(list(self._books.values()))

    def __contains__(self, isbn: object) -> bool:
        return isinstance(isbn, str) and normalize_isbn(isbn) in self._books

    def add(self, book: Book) -> None:
        """Add a new book at the end of the catalog.

        Args:
            book: Book to store.

        Raises:
            ValidationError: If any field fails validation.
            DuplicateError: If a book with the same normalized ISBN exists.
        """
        validate_book(book)
        key = book.key
        if key in self._books:
            TelemetryService.get_instance().record_operation("add", "duplicate")
            raise DuplicateError(book.isbn)
        self._books[key] = book
        TelemetryService.get_instance().record_operation("add", "ok")
        logger.info("Added book '%s' (%s)", book.title, book.isbn)

    def update(self, isbn: str, book: Book) -> Book:
        """Replace the book stored under ``isbn`` with ``book``.

        The ISBN may change. The replacement is appended at the end of the
        iteration order even when the key is unchanged.

        Args:
            isbn: ISBN of the stored book (hyphens optional).
            book: Replacement book.

        Returns:
            The stored replacement.

        Raises:
            NotFoundError: If nothing is stored under ``isbn``.
            ValidationError: If the replacement fails validation.
            DuplicateError: If the replacement's ISBN belongs to another book.
        """
        old_key = normalize_isbn(isbn)
        if old_key not in self._books:
            TelemetryService.get_instance().record_operation("update", "not_found")
            raise NotFoundError(isbn)

        validate_book(book)
        new_key = book.key
        if new_key != old_key and new_key in self._books:
            TelemetryService.get_instance().record_operation("update", "duplicate")
            raise DuplicateError(book.isbn)

        del self._books[old_key]
        self._books[new_key] = book
        TelemetryService.get_instance().record_operation("update", "ok")
        if new_key != old_key:
            logger.info("Updated book '%s' (ISBN %s -> %s)", book.title, isbn, book.isbn)
        else:
            logger.info("Updated book '%s' (%s)", book.title, book.isbn)
        return book

    def get(self, isbn: str) -> Book:
        """Get the book stored under an ISBN.

        Raises:
            NotFoundError: If nothing is stored under ``isbn``.
        """
        book = self._books.get(normalize_isbn(isbn))
        if book is None:
            logger.debug("Book '%s' not found", isbn)
            raise NotFoundError(isbn)
        logger.debug("Found book '%s'", isbn)
        return book

    def list(self) -> list[Book]:
        """Return a snapshot of all books in catalog order."""
        return list(self._books.values())

    def search(
        self,
        title: str | None = None,
        author: str | None = None,
        genre: str | None = None,
        year: int | None = None,
        isbn: str | None = None,
    ) -> list[Book]:
        """Find books matching every given filter.

        None or blank filters are ignored. Title, author and genre are
        case-insensitive substring matches, year is an exact match and isbn
        is a substring match against the ISBN as entered.

        Args:
            title: Text the title must contain.
            author: Text the author must contain.
            genre: Text the genre must contain.
            year: Exact publication year.
            isbn: Text the ISBN must contain.

        Returns:
            Matching books in catalog order (empty list if none).

        Example:
            >>> [b.title for b in catalog.search(author="dost")]
            ['Crime and Punishment']
        """
        text_filters = [
            (field_name, value.casefold())
            for field_name, value in (("title", title), ("author", author), ("genre", genre))
            if not _is_blank(value)
        ]
        isbn_part = None if _is_blank(isbn) else isbn

        results = []
        for book in self._books.values():
            if any(value not in getattr(book, field_name).casefold() for field_name, value in text_filters):
                continue
            if year is not None and book.year != year:
                continue
            if isbn_part is not None and isbn_part not in book.isbn:
                continue
            results.append(book)

        logger.debug("Search matched %d of %d books", len(results), len(self._books))
        return results
