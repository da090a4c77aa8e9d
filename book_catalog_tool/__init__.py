"""book-catalog-tool: manage a local catalog of book records."""

__version__ = "0.1.0"
