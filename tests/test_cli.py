"""Tests for the one-shot CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from book_catalog_tool.cli import app

runner = CliRunner()

CRIME = [
    "--title",
    "Crime and Punishment",
    "--author",
    "Dostoevsky",
    "--year",
    "1866",
    "--isbn",
    "978-5-389-07478-7",
    "--genre",
    "Novel",
]
CLEAN_CODE = [
    "--title",
    "Clean Code",
    "--author",
    "Robert C. Martin",
    "--year",
    "2008",
    "--isbn",
    "978-0-13-235088-4",
    "--genre",
    "Programming",
]


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "books.json"


def invoke(data_file: Path, *args: str):  # type: ignore[no-untyped-def]
    return runner.invoke(app, [*args, "--file", str(data_file)])


class TestMain:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "book-catalog-tool version 0.1.0" in result.output

    def test_no_command_prints_hint(self) -> None:
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "--help" in result.output


class TestAddAndShow:
    def test_add_persists_to_data_file(self, data_file: Path) -> None:
        result = invoke(data_file, "add", *CRIME)

        assert result.exit_code == 0, result.output
        assert "Added book: 978-5-389-07478-7" in result.output
        assert data_file.exists()

    def test_show_by_normalized_isbn(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "show", "9785389074787")

        assert result.exit_code == 0
        assert "Crime and Punishment" in result.output
        assert "Author: Dostoevsky" in result.output

    def test_show_json(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "show", "978-5-389-07478-7", "--format", "json")

        data = json.loads(result.output)
        assert data["year"] == 1866
        assert data["kind"] == "book"

    def test_show_unknown_isbn_fails(self, data_file: Path) -> None:
        result = invoke(data_file, "show", "1234567890")

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_add_duplicate_fails(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(
            data_file,
            "add",
            "--title",
            "Other",
            "--author",
            "Someone",
            "--year",
            "2000",
            "--isbn",
            "9785389074787",
        )

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_invalid_year_fails_and_writes_nothing(self, data_file: Path) -> None:
        result = invoke(
            data_file,
            "add",
            "--title",
            "Future Book",
            "--author",
            "Someone",
            "--year",
            "5000",
            "--isbn",
            "1234567890",
        )

        assert result.exit_code == 1
        assert "Invalid year" in result.output
        assert not data_file.exists()


class TestEdit:
    def test_edit_changes_only_given_fields(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "edit", "9785389074787", "--genre", "Classic")

        assert result.exit_code == 0, result.output
        shown = json.loads(invoke(data_file, "show", "9785389074787", "-f", "json").output)
        assert shown["genre"] == "Classic"
        assert shown["title"] == "Crime and Punishment"

    def test_edit_moves_book_to_end(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)
        invoke(data_file, "add", *CLEAN_CODE)

        invoke(data_file, "edit", "978-5-389-07478-7", "--genre", "Classic")

        listed = json.loads(invoke(data_file, "list", "--format", "json").output)
        assert [b["title"] for b in listed] == ["Clean Code", "Crime and Punishment"]

    def test_edit_isbn_collision_fails(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)
        invoke(data_file, "add", *CLEAN_CODE)

        result = invoke(data_file, "edit", "9785389074787", "--isbn", "9780132350884")

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_edit_without_updates_fails(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "edit", "9785389074787")

        assert result.exit_code == 1
        assert "No updates provided" in result.output

    def test_edit_unknown_isbn_fails(self, data_file: Path) -> None:
        result = invoke(data_file, "edit", "1234567890", "--title", "New")

        assert result.exit_code == 1
        assert "not found" in result.output


class TestListAndSearch:
    def test_list_empty(self, data_file: Path) -> None:
        result = invoke(data_file, "list")

        assert result.exit_code == 0
        assert "No books in catalog" in result.output

    def test_list_count(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)
        invoke(data_file, "add", *CLEAN_CODE)

        result = invoke(data_file, "list", "--count")

        assert result.output.strip() == "2"

    def test_search_case_insensitive(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)
        invoke(data_file, "add", *CLEAN_CODE)

        result = invoke(data_file, "search", "--author", "dost")

        assert "Crime and Punishment" in result.output
        assert "Clean Code" not in result.output

    def test_search_filters_combine(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "search", "--author", "dost", "--year", "2008")

        assert "Nothing found" in result.output

    def test_search_json_empty(self, data_file: Path) -> None:
        result = invoke(data_file, "search", "--title", "x", "--format", "json")

        assert json.loads(result.output) == []


class TestExportImport:
    def test_export_then_import_into_new_file(self, data_file: Path, tmp_path: Path) -> None:
        invoke(data_file, "add", *CRIME)
        invoke(data_file, "add", *CLEAN_CODE)
        backup = tmp_path / "backup.json"

        exported = invoke(data_file, "export", str(backup))
        other = tmp_path / "other.json"
        imported = invoke(other, "import", str(backup))

        assert exported.exit_code == 0
        assert "Exported 2 book(s)" in exported.output
        assert "Imported 2 book(s), skipped 0" in imported.output
        listed = json.loads(invoke(other, "list", "-f", "json").output)
        assert [b["title"] for b in listed] == ["Crime and Punishment", "Clean Code"]

    def test_import_skips_existing(self, data_file: Path, tmp_path: Path) -> None:
        invoke(data_file, "add", *CRIME)
        backup = tmp_path / "backup.json"
        invoke(data_file, "export", str(backup))

        result = invoke(data_file, "import", str(backup))

        assert "Imported 0 book(s), skipped 1" in result.output

    def test_import_corrupt_file_fails(self, data_file: Path, tmp_path: Path) -> None:
        broken = tmp_path / "broken.json"
        broken.write_text("{broken")

        result = invoke(data_file, "import", str(broken))

        assert result.exit_code == 1
        assert "not a valid book catalog" in result.output

    def test_corrupt_data_file_fails(self, data_file: Path) -> None:
        data_file.write_text("{broken")

        result = invoke(data_file, "list")

        assert result.exit_code == 1

    def test_deeply_nested_data_file_fails(self, data_file: Path) -> None:
        data_file.write_text("[" * 100_000)

        result = invoke(data_file, "list")

        assert result.exit_code == 1
        assert "not a valid book catalog" in result.output


class TestSeed:
    def test_seed_writes_sample_books(self, data_file: Path) -> None:
        result = invoke(data_file, "seed")

        assert result.exit_code == 0
        assert "Seeded 5 sample book(s)" in result.output
        listed = json.loads(invoke(data_file, "list", "-f", "json").output)
        assert [b["isbn"] for b in listed] == [
            "978-5-389-07478-7",
            "978-5-389-07479-4",
            "978-0-13-235088-4",
            "978-5-907144-31-3",
            "978-5-17-118366-3",
        ]

    def test_seed_to_destination(self, data_file: Path, tmp_path: Path) -> None:
        demo = tmp_path / "demo.json"

        result = invoke(data_file, "seed", str(demo))

        assert result.exit_code == 0
        assert demo.exists()
        assert not data_file.exists()

    def test_seed_refuses_to_overwrite(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "seed")

        assert result.exit_code == 1
        assert "--force" in result.output
        assert invoke(data_file, "list", "--count").output.strip() == "1"

    def test_seed_force_overwrites(self, data_file: Path) -> None:
        invoke(data_file, "add", *CRIME)

        result = invoke(data_file, "seed", "--force")

        assert result.exit_code == 0
        assert invoke(data_file, "list", "--count").output.strip() == "5"


class TestConfig:
    def test_set_file_used_by_later_commands(self, tmp_path: Path) -> None:
        target = tmp_path / "configured.json"

        result = runner.invoke(app, ["config", "set-file", str(target)])
        runner.invoke(app, ["add", *CRIME])

        assert result.exit_code == 0
        assert target.exists()
        shown = runner.invoke(app, ["config", "show"])
        assert str(target.resolve()) in shown.output

    def test_clear_file(self, tmp_path: Path) -> None:
        runner.invoke(app, ["config", "set-file", str(tmp_path / "configured.json")])

        result = runner.invoke(app, ["config", "clear-file"])
        shown = runner.invoke(app, ["config", "show"])

        assert result.exit_code == 0
        assert "(not set)" in shown.output
