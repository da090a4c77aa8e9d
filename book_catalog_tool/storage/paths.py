"""Path management for book-catalog-tool.

All persistent state lives under ~/.config/book-catalog-tool/ unless a
catalog file is chosen explicitly.

Functions:
    get_config_dir: Get the main configuration directory.
    get_default_catalog_path: Get the built-in default catalog data file.
    get_settings_path: Get the path to settings.json.
    ensure_config_dir: Create the configuration directory.
"""

from pathlib import Path


def get_config_dir() -> Path:
    """Get the configuration directory for book-catalog-tool.

    Returns:
        Path to ~/.config/book-catalog-tool/

    Example:
        >>> str(get_config_dir()).endswith(".config/book-catalog-tool")
        True
    """
    return Path.home() / ".config" / "book-catalog-tool"


def get_default_catalog_path() -> Path:
    """Get the catalog data file used when no other file is configured.

    Returns:
        Path to ~/.config/book-catalog-tool/books.json
    """
    return get_config_dir() / "books.json"


def get_settings_path() -> Path:
    """Get the path to the settings file.

    Returns:
        Path to ~/.config/book-catalog-tool/settings.json
    """
    return get_config_dir() / "settings.json"


def ensure_config_dir() -> None:
    """Create the configuration directory if it doesn't exist."""
    get_config_dir().mkdir(parents=True, exist_ok=True)
