"""Settings management for book-catalog-tool.

Settings persist across CLI sessions in ~/.config/book-catalog-tool/settings.json.

Functions:
    load_settings: Load settings from disk.
    save_settings: Save settings to disk.
    resolve_catalog_path: Pick the catalog data file for a command.
    set_default_catalog_file: Set the default catalog data file.
    clear_default_catalog_file: Clear the default catalog data file.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from pydantic import ValidationError

from book_catalog_tool.logging_config import get_logger
from book_catalog_tool.models import Settings
from book_catalog_tool.storage.paths import get_default_catalog_path, get_settings_path

logger = get_logger(__name__)

CATALOG_FILE_ENV = "BOOK_CATALOG_FILE"


def load_settings() -> Settings:
    """Load settings from disk.

    Returns:
        Settings object. Defaults if the file is missing or unreadable.
    """
    settings_path = get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, encoding="utf-8") as f:
            data = json.load(f)
        return Settings.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.warning("Failed to load settings from %s: %s", settings_path, e)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Save settings to disk."""
    settings_path = get_settings_path()
    settings_path.parent.mkdir(parents=True, exist_ok=True)

    with open(settings_path, "w", encoding="utf-8") as f:
        json.dump(settings.model_dump(), f, indent=2)

    logger.debug("Saved settings to %s", settings_path)


def resolve_catalog_path(explicit: str | Path | None = None) -> Path:
    """Pick the catalog data file.

    Precedence: ``explicit``, then $BOOK_CATALOG_FILE, then the
    default_catalog_file setting, then ~/.config/book-catalog-tool/books.json.

    Example:
        >>> resolve_catalog_path("./books.json")
        PosixPath('books.json')
    """
    if explicit:
        return Path(explicit).expanduser()
    from_env = os.environ.get(CATALOG_FILE_ENV)
    if from_env:
        return Path(from_env).expanduser()
    configured = load_settings().default_catalog_file
    if configured:
        return Path(configured).expanduser()
    return get_default_catalog_path()


def set_default_catalog_file(path: str | Path) -> Path:
    """Store an absolute catalog file path as the default.

    Returns:
        The stored path.
    """
    resolved = Path(path).expanduser().resolve()
    settings = load_settings()
    settings.default_catalog_file = str(resolved)
    save_settings(settings)
    logger.info("Set default catalog file to '%s'", resolved)
    return resolved


def clear_default_catalog_file() -> None:
    """Clear the default catalog file setting."""
    settings = load_settings()
    settings.default_catalog_file = None
    save_settings(settings)
    logger.info("Cleared default catalog file")
