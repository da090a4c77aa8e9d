"""Storage module for book-catalog-tool.

Classes:
    LoadResult: Counts of loaded and skipped entries from a load.

Functions:
    encode_books: Serialize books to the catalog file format.
    decode_books: Parse catalog file content.
    save: Write a catalog to a file.
    load: Add the books stored in a file to a catalog.
    get_config_dir: Get the main configuration directory.
    get_default_catalog_path: Get the default catalog data file.
    get_settings_path: Get the path to settings.json.
    ensure_config_dir: Create the configuration directory.
"""

from book_catalog_tool.storage.paths import (
    ensure_config_dir,
    get_config_dir,
    get_default_catalog_path,
    get_settings_path,
)
from book_catalog_tool.storage.persistence import (
    LoadResult,
    decode_books,
    encode_books,
    load,
    save,
)

__all__ = [
    "LoadResult",
    "decode_books",
    "encode_books",
    "ensure_config_dir",
    "get_config_dir",
    "get_default_catalog_path",
    "get_settings_path",
    "load",
    "save",
]
