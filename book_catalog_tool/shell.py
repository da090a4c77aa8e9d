"""Interactive numbered-menu shell for book-catalog-tool.

The shell reads a command number, prompts for the fields that command needs
and calls the catalog. Any catalog failure is reported and the menu is shown
again; only "0" or end of input ends the session.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer

from book_catalog_tool.catalog import Catalog
from book_catalog_tool.errors import CatalogError, ValidationError
from book_catalog_tool.logging_config import get_logger
from book_catalog_tool.models import Book
from book_catalog_tool.storage import load, save

logger = get_logger(__name__)

MENU = """
=== Book Catalog ===
1) Add book
2) Edit book
3) List books
4) Search books
5) Save to file
6) Load from file
0) Exit"""


def _parse_year(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise ValidationError("year", f"Year must be a whole number, got '{text}'.") from None


def _ask(label: str) -> str:
    return typer.prompt(label, default="", show_default=False)


def _ask_or_keep(label: str, current: str) -> str:
    value = typer.prompt(label, default=current)
    return value.strip() or current


class CatalogShell:
    """Prompt/dispatch loop over a single catalog instance.

    Args:
        catalog: The session's catalog.
        default_file: File offered by the save and load prompts.
    """

    def __init__(self, catalog: Catalog, default_file: Path) -> None:
        self.catalog = catalog
        self.default_file = default_file
        self._commands: dict[str, Callable[[], None]] = {
            "1": self.add_book,
            "2": self.edit_book,
            "3": self.list_books,
            "4": self.search_books,
            "5": self.save_catalog,
            "6": self.load_catalog,
        }

    def run(self) -> None:
        """Show the menu and dispatch commands until exit."""
        try:
            while True:
                typer.echo(MENU)
                choice = _ask("Choose an option").strip()
                if choice == "0":
                    break
                self.dispatch(choice)
        except typer.Abort:
            # End of input
            typer.echo()
        typer.echo("Exit.")

    def dispatch(self, choice: str) -> None:
        """Run one command, reporting failures instead of raising them."""
        command = self._commands.get(choice)
        if command is None:
            typer.echo("Unknown command")
            return
        try:
            command()
        except typer.Abort:
            raise
        except CatalogError as e:
            logger.debug("Command %s failed: %s", choice, e.kind.value)
            typer.echo(f"Error: {e}")
        except ValueError as e:
            # pydantic rejected a field type
            typer.echo(f"Error: {e}")
        except Exception as e:
            # Anything else (e.g. an unresolvable ~user path) must not end the session
            logger.debug("Command %s failed unexpectedly", choice, exc_info=True)
            typer.echo(f"Error: {e}")

    def add_book(self) -> None:
        title = _ask("Title")
        author = _ask("Author")
        year = _parse_year(_ask("Year"))
        isbn = _ask("ISBN")
        genre = _ask("Genre")
        self.catalog.add(Book(title=title, author=author, year=year, isbn=isbn, genre=genre))
        typer.echo("Book added!")

    def edit_book(self) -> None:
        """Edit a book; empty input keeps the current value of a field."""
        old_isbn = _ask("ISBN of the book to edit")
        old = self.catalog.get(old_isbn)
        typer.echo(f"Current: {old}")

        title = _ask_or_keep("New title", old.title)
        author = _ask_or_keep("Author", old.author)
        year = _parse_year(_ask_or_keep("Year", str(old.year)))
        isbn = _ask_or_keep("ISBN", old.isbn)
        genre = _ask_or_keep("Genre", old.genre)

        self.catalog.update(
            old_isbn, Book(title=title, author=author, year=year, isbn=isbn, genre=genre)
        )
        typer.echo("Updated.")

    def list_books(self) -> None:
        books = self.catalog.list()
        if not books:
            typer.echo("Catalog is empty.")
        for book in books:
            typer.echo(str(book))

    def search_books(self) -> None:
        """Search by any combination of fields; empty input skips a filter."""
        title = _ask("Title contains")
        author = _ask("Author contains")
        genre = _ask("Genre contains")
        year_text = _ask("Year (=)")
        isbn = _ask("ISBN contains")

        year = _parse_year(year_text) if year_text.strip() else None
        found = self.catalog.search(title=title, author=author, genre=genre, year=year, isbn=isbn)
        if not found:
            typer.echo("Nothing found.")
        for book in found:
            typer.echo(str(book))

    def save_catalog(self) -> None:
        path = Path(typer.prompt("File", default=str(self.default_file))).expanduser()
        save(self.catalog, path)
        typer.echo(f"Saved {len(self.catalog)} book(s) to {path}.")

    def load_catalog(self) -> None:
        path = Path(typer.prompt("File", default=str(self.default_file))).expanduser()
        result = load(self.catalog, path)
        typer.echo(f"Loaded {result.loaded} book(s), skipped {result.skipped}.")
