"""CLI entry point for book-catalog-tool.

One-shot commands load the catalog data file, run a single operation and
write the file back when the catalog changed. The ``shell`` command starts
the interactive numbered menu instead.

Command Structure:
    book-catalog-tool
    ├── add, edit, show, list, search
    ├── export, import, seed
    ├── shell
    └── config
        └── show, set-file, clear-file
"""

import atexit
import json
from enum import Enum
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from book_catalog_tool import __version__
from book_catalog_tool.catalog import Catalog
from book_catalog_tool.errors import CatalogError
from book_catalog_tool.logging_config import get_logger, setup_logging
from book_catalog_tool.models import Book
from book_catalog_tool.samples import sample_catalog
from book_catalog_tool.settings import (
    CATALOG_FILE_ENV,
    clear_default_catalog_file,
    load_settings,
    resolve_catalog_path,
    set_default_catalog_file,
)
from book_catalog_tool.shell import CatalogShell
from book_catalog_tool.storage import get_settings_path, load, save
from book_catalog_tool.telemetry import TelemetryConfig, TelemetryService, traced

logger = get_logger(__name__)

app = typer.Typer(invoke_without_command=True)
config_app = typer.Typer(help="Show or change the default catalog data file")
app.add_typer(config_app, name="config")


class OutputFormat(str, Enum):
    """Output format options."""

    HUMAN = "human"
    JSON = "json"


CatalogFileOption = Annotated[
    Path | None,
    typer.Option(
        "--file",
        help=f"Catalog data file (default: ${CATALOG_FILE_ENV}, then the configured file)",
    ),
]
FormatOption = Annotated[OutputFormat, typer.Option("--format", "-f", help="Output format")]


# =============================================================================
# Helper Functions
# =============================================================================


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"book-catalog-tool version {__version__}")
        raise typer.Exit()


def _shutdown_telemetry() -> None:
    TelemetryService.get_instance().shutdown()


def _fail(error: CatalogError) -> NoReturn:
    typer.echo(f"Error: {error}", err=True)
    raise typer.Exit(1)


def _open_catalog(file: Path | None) -> tuple[Catalog, Path]:
    """Load the catalog data file (if it exists) into a new catalog."""
    path = resolve_catalog_path(file)
    catalog = Catalog()
    if not path.exists():
        logger.debug("Catalog file %s does not exist yet, starting empty", path)
        return catalog, path
    try:
        result = load(catalog, path)
    except CatalogError as e:
        _fail(e)
    if result.skipped:
        typer.echo(f"Warning: skipped {result.skipped} invalid entries in {path}", err=True)
    return catalog, path


def _save_catalog(catalog: Catalog, path: Path) -> None:
    try:
        save(catalog, path)
    except CatalogError as e:
        _fail(e)


def _print_books(books: list[Book], output_format: OutputFormat) -> None:
    if output_format == OutputFormat.JSON:
        data = [book.model_dump(mode="json") for book in books]
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    for book in books:
        _print_book(book)


def _print_book(book: Book) -> None:
    typer.echo(f"[{book.isbn}]: {book.title}")
    typer.echo(f"  Author: {book.author}")
    typer.echo(f"  Year: {book.year}")
    if book.genre:
        typer.echo(f"  Genre: {book.genre}")


# =============================================================================
# Main App Callback
# =============================================================================


@traced("main")
def _run_main_command() -> None:
    typer.echo("book-catalog-tool - manage a local catalog of books")
    typer.echo("Use --help for available commands or 'shell' for the interactive menu")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Verbosity level: -v=INFO, -vv=DEBUG, -vvv=TRACE (includes library internals)",
        ),
    ] = 0,
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    telemetry: Annotated[
        bool,
        typer.Option(
            "--telemetry",
            envvar="OTEL_ENABLED",
            help="Enable OpenTelemetry tracing (or set OTEL_ENABLED=true)",
        ),
    ] = False,
) -> None:
    """Book catalog: add, edit, list, search, save and load book records.

    \b
    QUICK START:
        book-catalog-tool add --title "Crime and Punishment" --author Dostoevsky \\
            --year 1866 --isbn 978-5-389-07478-7 --genre Novel
        book-catalog-tool search --author dost
        book-catalog-tool shell

    \b
    DATA STORAGE:
        ~/.config/book-catalog-tool/books.json     - Default catalog file
        ~/.config/book-catalog-tool/settings.json  - Settings
    """
    setup_logging(verbose)

    config = TelemetryConfig.from_env()
    config.enabled = telemetry or config.enabled
    TelemetryService.get_instance().initialize(config)
    atexit.register(_shutdown_telemetry)

    if ctx.invoked_subcommand is None:
        _run_main_command()


# =============================================================================
# Catalog Commands
# =============================================================================


@app.command(name="add")
def add_command(
    title: Annotated[str, typer.Option("--title", help="Book title")],
    author: Annotated[str, typer.Option("--author", help="Author(s)")],
    year: Annotated[int, typer.Option("--year", help="Publication year (0-3000)")],
    isbn: Annotated[str, typer.Option("--isbn", help="ISBN-10 or ISBN-13, hyphens allowed")],
    genre: Annotated[str, typer.Option("--genre", help="Genre")] = "",
    file: CatalogFileOption = None,
) -> None:
    """Add a book to the catalog.

    \b
    Examples:
        book-catalog-tool add --title "Clean Code" --author "Robert C. Martin" \\
            --year 2008 --isbn 978-0-13-235088-4 --genre Programming
    """
    logger.info("Adding book: %s", isbn)
    catalog, path = _open_catalog(file)
    try:
        catalog.add(Book(title=title, author=author, year=year, isbn=isbn, genre=genre))
    except CatalogError as e:
        _fail(e)
    _save_catalog(catalog, path)
    typer.echo(f"Added book: {isbn}")


@app.command(name="edit")
def edit_command(
    isbn: Annotated[str, typer.Argument(help="ISBN of the book to edit")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    author: Annotated[str | None, typer.Option("--author", help="New author(s)")] = None,
    year: Annotated[int | None, typer.Option("--year", help="New publication year")] = None,
    new_isbn: Annotated[str | None, typer.Option("--isbn", help="New ISBN")] = None,
    genre: Annotated[str | None, typer.Option("--genre", help="New genre")] = None,
    file: CatalogFileOption = None,
) -> None:
    """Edit a book. Only the given fields change.

    \b
    The edited book moves to the end of the listing order.

    \b
    Examples:
        book-catalog-tool edit 9785389074787 --genre "Classic novel"
        book-catalog-tool edit 978-5-389-07478-7 --isbn 978-5-389-07478-8
    """
    updates = {
        "title": title,
        "author": author,
        "year": year,
        "isbn": new_isbn,
        "genre": genre,
    }
    updates = {key: value for key, value in updates.items() if value is not None}
    if not updates:
        typer.echo("No updates provided. Use --help to see available options.", err=True)
        raise typer.Exit(1)

    logger.info("Editing book: %s", isbn)
    catalog, path = _open_catalog(file)
    try:
        current = catalog.get(isbn)
        updated = catalog.update(isbn, current.model_copy(update=updates))
    except CatalogError as e:
        _fail(e)
    _save_catalog(catalog, path)
    typer.echo(f"Updated book: {updated.isbn}")


@app.command(name="show")
def show_command(
    isbn: Annotated[str, typer.Argument(help="ISBN of the book (hyphens optional)")],
    output_format: FormatOption = OutputFormat.HUMAN,
    file: CatalogFileOption = None,
) -> None:
    """Show one book.

    \b
    Examples:
        book-catalog-tool show 9785389074787
        book-catalog-tool show 978-5-389-07478-7 --format json
    """
    catalog, _ = _open_catalog(file)
    try:
        book = catalog.get(isbn)
    except CatalogError as e:
        _fail(e)
    if output_format == OutputFormat.JSON:
        typer.echo(json.dumps(book.model_dump(mode="json"), indent=2, ensure_ascii=False))
    else:
        _print_book(book)


@app.command(name="list")
def list_command(
    output_format: FormatOption = OutputFormat.HUMAN,
    count: Annotated[
        bool, typer.Option("--count", "-c", help="Show only the number of books")
    ] = False,
    file: CatalogFileOption = None,
) -> None:
    """List all books in catalog order.

    \b
    Examples:
        book-catalog-tool list
        book-catalog-tool list --format json
        book-catalog-tool list --count
    """
    catalog, _ = _open_catalog(file)
    books = catalog.list()

    if count:
        if output_format == OutputFormat.JSON:
            typer.echo(json.dumps({"count": len(books)}))
        else:
            typer.echo(len(books))
        return

    if not books and output_format == OutputFormat.HUMAN:
        typer.echo("No books in catalog")
        return
    _print_books(books, output_format)


@app.command(name="search")
def search_command(
    title: Annotated[str | None, typer.Option("--title", help="Title contains")] = None,
    author: Annotated[str | None, typer.Option("--author", help="Author contains")] = None,
    genre: Annotated[str | None, typer.Option("--genre", help="Genre contains")] = None,
    year: Annotated[int | None, typer.Option("--year", help="Exact publication year")] = None,
    isbn: Annotated[str | None, typer.Option("--isbn", help="ISBN contains")] = None,
    output_format: FormatOption = OutputFormat.HUMAN,
    file: CatalogFileOption = None,
) -> None:
    """Search books. All given filters must match.

    \b
    Text filters are case-insensitive substring matches.

    \b
    Examples:
        book-catalog-tool search --author dost
        book-catalog-tool search --genre novel --year 1866
    """
    catalog, _ = _open_catalog(file)
    found = catalog.search(title=title, author=author, genre=genre, year=year, isbn=isbn)
    if not found and output_format == OutputFormat.HUMAN:
        typer.echo("Nothing found")
        return
    _print_books(found, output_format)


@app.command(name="export")
def export_command(
    destination: Annotated[Path, typer.Argument(help="File to write")],
    file: CatalogFileOption = None,
) -> None:
    """Save the catalog to another file.

    \b
    Examples:
        book-catalog-tool export ./backup.json
    """
    catalog, _ = _open_catalog(file)
    _save_catalog(catalog, destination)
    typer.echo(f"Exported {len(catalog)} book(s) to {destination}")


@app.command(name="import")
def import_command(
    source: Annotated[Path, typer.Argument(help="Catalog file to read")],
    file: CatalogFileOption = None,
) -> None:
    """Add the books from another catalog file.

    \b
    Invalid entries and ISBNs already in the catalog are skipped.

    \b
    Examples:
        book-catalog-tool import ./backup.json
    """
    catalog, path = _open_catalog(file)
    try:
        result = load(catalog, source)
    except CatalogError as e:
        _fail(e)
    if result.loaded:
        _save_catalog(catalog, path)
    typer.echo(f"Imported {result.loaded} book(s), skipped {result.skipped}")


@app.command(name="seed")
def seed_command(
    destination: Annotated[
        Path | None, typer.Argument(help="File to write (default: the catalog data file)")
    ] = None,
    force: Annotated[
        bool, typer.Option("--force", help="Overwrite an existing file")
    ] = False,
    file: CatalogFileOption = None,
) -> None:
    """Write a catalog file holding five sample books.

    \b
    Examples:
        book-catalog-tool seed ./demo.json
        book-catalog-tool shell --load ./demo.json
    """
    path = destination if destination is not None else resolve_catalog_path(file)
    if path.exists() and not force:
        typer.echo(f"Error: {path} already exists. Use --force to overwrite it.", err=True)
        raise typer.Exit(1)
    catalog = sample_catalog()
    _save_catalog(catalog, path)
    typer.echo(f"Seeded {len(catalog)} sample book(s) to {path}")


@app.command(name="shell")
def shell_command(
    load_file: Annotated[
        Path | None, typer.Option("--load", help="Catalog file to load at start")
    ] = None,
    file: CatalogFileOption = None,
) -> None:
    """Start the interactive menu.

    \b
    The session starts with an empty catalog; use 'Save' and 'Load' to
    work with files. The data file is offered as the default path.
    """
    catalog = Catalog()
    if load_file is not None:
        try:
            result = load(catalog, load_file)
        except CatalogError as e:
            _fail(e)
        typer.echo(f"Loaded {result.loaded} book(s), skipped {result.skipped}.")
    CatalogShell(catalog, resolve_catalog_path(file)).run()


# =============================================================================
# Config Commands
# =============================================================================


@config_app.command(name="show")
def config_show() -> None:
    """Show settings and the catalog file in use."""
    settings = load_settings()
    typer.echo(f"Settings file: {get_settings_path()}")
    typer.echo(f"Default catalog file: {settings.default_catalog_file or '(not set)'}")
    typer.echo(f"Catalog file in use: {resolve_catalog_path()}")


@config_app.command(name="set-file")
def config_set_file(
    path: Annotated[Path, typer.Argument(help="Catalog data file to use by default")],
) -> None:
    """Set the default catalog data file."""
    stored = set_default_catalog_file(path)
    typer.echo(f"Default catalog file set to {stored}")


@config_app.command(name="clear-file")
def config_clear_file() -> None:
    """Clear the default catalog data file."""
    clear_default_catalog_file()
    typer.echo("Default catalog file cleared")


if __name__ == "__main__":
    app()
