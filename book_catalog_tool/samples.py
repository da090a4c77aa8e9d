"""Sample books for seeding a demo catalog file."""

from book_catalog_tool.catalog import Catalog
from book_catalog_tool.models import Book

SAMPLE_BOOKS: tuple[Book, ...] = (
    Book(
        title="Преступление и наказание",
        author="Ф. М. Достоевский",
        year=1866,
        isbn="978-5-389-07478-7",
        genre="Роман",
    ),
    Book(
        title="Мастер и Маргарита",
        author="М. А. Булгаков",
        year=1967,
        isbn="978-5-389-07479-4",
        genre="Роман",
    ),
    Book(
        title="Чистый код",
        author="Robert C. Martin",
        year=2008,
        isbn="978-0-13-235088-4",
        genre="Программирование",
    ),
    Book(
        title="Алгоритмы: построение и анализ",
        author="Т. Кормен и др.",
        year=2009,
        isbn="978-5-907144-31-3",
        genre="Учебник",
    ),
    Book(
        title="Три товарища",
        author="Эрих Мария Ремарк",
        year=1936,
        isbn="978-5-17-118366-3",
        genre="Роман",
    ),
)


def sample_catalog() -> Catalog:
    """Build a catalog holding the sample books in order."""
    catalog = Catalog()
    for book in SAMPLE_BOOKS:
        catalog.add(book)
    return catalog
