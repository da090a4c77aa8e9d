"""Error classes for book-catalog-tool.

Every failure raised by the catalog store and the persistence adapter is a
CatalogError carrying an ErrorKind, so callers can either catch a specific
subclass or catch the base class and inspect ``kind``.

Exceptions:
    CatalogError: Base exception for catalog operations.
    ValidationError: A book field failed validation.
    NotFoundError: No book is stored under the given ISBN.
    DuplicateError: A book with the same normalized ISBN already exists.
    CatalogIOError: A catalog file could not be read or written.
    FormatError: A catalog file is not a valid serialized book set.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class ErrorKind(str, Enum):
    """Closed set of catalog failure kinds."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    DUPLICATE = "duplicate"
    IO = "io"
    FORMAT = "format"


class CatalogError(Exception):
    """Base exception for catalog operations.

    Attributes:
        kind: The failure kind.
        isbn: ISBN involved in the failure (if applicable).
        path: File involved in the failure (if applicable).

    Example:
        >>> try:
        ...     catalog.get("9785389074787")
        ... except CatalogError as e:
        ...     print(e.kind, e)
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        isbn: str | None = None,
        path: Path | None = None,
    ) -> None:
        self.kind = kind
        self.isbn = isbn
        self.path = path
        super().__init__(message)


class ValidationError(CatalogError):
    """Raised when a book field fails validation.

    Example:
        >>> raise ValidationError("year", "Invalid year: 3001. ...")
    """

    def __init__(self, field: str, message: str, isbn: str | None = None) -> None:
        """Initialize ValidationError.

        Args:
            field: Name of the offending field.
            message: Description of the problem and how to fix it.
            isbn: ISBN of the rejected book, if known.
        """
        self.field = field
        super().__init__(message, ErrorKind.VALIDATION, isbn=isbn)


class NotFoundError(CatalogError):
    """Raised when no book is stored under an ISBN."""

    def __init__(self, isbn: str) -> None:
        message = (
            f"Book with ISBN '{isbn}' not found in catalog. "
            f"Use 'list' or 'search' to see the stored books."
        )
        super().__init__(message, ErrorKind.NOT_FOUND, isbn=isbn)


class DuplicateError(CatalogError):
    """Raised when a book with the same normalized ISBN is already stored."""

    def __init__(self, isbn: str) -> None:
        message = (
            f"Book with ISBN '{isbn}' already exists in catalog. "
            f"Use 'edit {isbn}' to change the stored book or choose a different ISBN."
        )
        super().__init__(message, ErrorKind.DUPLICATE, isbn=isbn)


class CatalogIOError(CatalogError):
    """Raised when a catalog file cannot be read or written."""

    def __init__(self, path: Path, original_error: OSError) -> None:
        self.original_error = original_error
        message = (
            f"Cannot access catalog file {path}: {original_error.strerror or original_error}. "
            f"Check that the path exists and is readable/writable."
        )
        super().__init__(message, ErrorKind.IO, path=path)


class FormatError(CatalogError):
    """Raised when catalog file content is corrupt or unrecognized."""

    def __init__(self, reason: str, path: Path | None = None) -> None:
        location = f" {path}" if path else ""
        message = (
            f"Catalog file{location} is not a valid book catalog: {reason}. "
            f"Restore it from a backup or save the catalog again."
        )
        super().__init__(message, ErrorKind.FORMAT, path=path)
