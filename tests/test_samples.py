"""Tests for the sample catalog."""

from pathlib import Path

from book_catalog_tool.catalog import Catalog
from book_catalog_tool.samples import SAMPLE_BOOKS, sample_catalog
from book_catalog_tool.storage import load, save


class TestSampleCatalog:
    def test_holds_five_books_in_order(self) -> None:
        catalog = sample_catalog()

        assert len(catalog) == 5
        assert catalog.list() == list(SAMPLE_BOOKS)

    def test_builds_independent_catalogs(self) -> None:
        first = sample_catalog()
        second = sample_catalog()

        first.update("9785171183663", SAMPLE_BOOKS[4].model_copy(update={"genre": "Classic"}))

        assert second.get("9785171183663").genre == "Роман"

    def test_save_then_load_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "books.json"
        save(sample_catalog(), path)

        restored = Catalog()
        result = load(restored, path)

        assert result.loaded == 5
        assert result.skipped == 0
        assert restored.list() == list(SAMPLE_BOOKS)
        assert restored.get("978-5-907144-31-3").title == "Алгоритмы: построение и анализ"
