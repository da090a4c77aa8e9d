"""Data models for book-catalog-tool.

This module provides the Pydantic v2 Book record, the persisted Settings
model and the reusable field validators the catalog store applies before a
book is stored.

Models:
    Book: A single catalog entry describing a book.
    Settings: User preferences persisted across CLI sessions.

Functions:
    normalize_isbn: Canonical catalog key for an ISBN.
    validate_not_blank: Reject empty or whitespace-only text.
    validate_year: Reject years outside 0-3000.
    validate_isbn: Reject ISBNs that are not 10-17 digits/hyphens.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MIN_YEAR = 0
MAX_YEAR = 3000
ISBN_PATTERN = re.compile(r"[0-9-]{10,17}")

# =============================================================================
# Reusable Validator Functions
# =============================================================================


def normalize_isbn(isbn: str) -> str:
    """Strip all hyphens from an ISBN.

    This is the only canonicalization applied to catalog keys.

    Example:
        >>> normalize_isbn("978-5-389-07478-7")
        '9785389074787'
    """
    return isbn.replace("-", "")


def validate_not_blank(value: str, field_name: str) -> str:
    """Validate a text field is not empty or whitespace only.

    Args:
        value: The text to validate.
        field_name: Name of the field for error messages.

    Returns:
        The validated text, unchanged.

    Raises:
        ValueError: If the text is blank.
    """
    if not value or not value.strip():
        raise ValueError(f"Field '{field_name}' must not be blank. Please provide a {field_name}.")
    return value


def validate_year(value: int, field_name: str = "year") -> int:
    """Validate year lies within the supported range.

    Args:
        value: The year to validate.
        field_name: Name of the field for error messages.

    Returns:
        The validated year.

    Raises:
        ValueError: If the year is out of range.
    """
    if value < MIN_YEAR or value > MAX_YEAR:
        raise ValueError(
            f"Invalid {field_name}: {value}. "
            f"Year must be between {MIN_YEAR} and {MAX_YEAR}."
        )
    return value


def validate_isbn(value: str, field_name: str = "isbn") -> str:
    """Validate ISBN is 10-17 characters of digits and hyphens.

    No checksum is verified; ISBN-10 and ISBN-13 with or without hyphens
    both pass.

    Args:
        value: The ISBN to validate.
        field_name: Name of the field for error messages.

    Returns:
        The validated ISBN, unchanged.

    Raises:
        ValueError: If the ISBN format is invalid.

    Example:
        >>> validate_isbn("978-5-389-07478-7")
        '978-5-389-07478-7'
    """
    if not ISBN_PATTERN.fullmatch(value):
        raise ValueError(
            f"Invalid {field_name} format: '{value}'. "
            f"Expected 10 to 17 characters of digits and hyphens, "
            f"e.g., '978-5-389-07478-7' or '0132350882'."
        )
    return value


# =============================================================================
# Book Model
# =============================================================================


class Book(BaseModel):
    """Book entry stored in the catalog.

    The model coerces field types only. Domain rules (non-blank title and
    author, year range, ISBN format) are checked by the catalog store when
    the book is added, so an invalid Book can be built but never stored.

    Attributes:
        title: Book title (non-blank when stored).
        author: Author(s) (non-blank when stored).
        year: Publication year, 0-3000.
        isbn: ISBN as entered, hyphens allowed.
        genre: Free-text genre.
        kind: Record discriminator, always "book".

    Example:
        >>> book = Book(
        ...     title="Crime and Punishment",
        ...     author="Dostoevsky",
        ...     year=1866,
        ...     isbn="978-5-389-07478-7",
        ...     genre="Novel",
        ... )
        >>> book.key
        '9785389074787'
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Book title")
    author: str = Field(description="Author(s)")
    year: int = Field(description="Publication year (0-3000)")
    isbn: str = Field(description="ISBN-10 or ISBN-13, hyphens allowed")
    genre: str = Field(default="", description="Free-text genre")
    kind: Literal["book"] = Field(default="book", description="Record kind discriminator")

    @property
    def key(self) -> str:
        """Catalog key: the normalized ISBN."""
        return normalize_isbn(self.isbn)

    def __str__(self) -> str:
        # Prefix follows the kind discriminator, e.g. "Book{...}"
        return (
            f"{self.kind.capitalize()}{{title='{self.title}', author='{self.author}', year={self.year}, "
            f"isbn='{self.isbn}', genre='{self.genre}'}}"
        )


# =============================================================================
# Settings Model
# =============================================================================


class Settings(BaseModel):
    """Global settings for book-catalog-tool.

    Attributes:
        default_catalog_file: Catalog data file used when --file is not given.

    Example:
        >>> settings = Settings(default_catalog_file="~/books.json")
    """

    default_catalog_file: str | None = Field(
        default=None, description="Default catalog data file"
    )
