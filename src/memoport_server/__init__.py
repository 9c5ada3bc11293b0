"""memoport: export and import server for personal memo collections."""

__version__ = "0.1.0"
