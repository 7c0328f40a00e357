"""
Smart Library Package.

A single-process library catalog: books indexed by ISBN and by title,
registered users, issue/return of books, simple reports, and pipe-delimited
record files that keep the state between runs.

Key Components:
- models: Pydantic models for books, users and circulation receipts
- catalog: the indexes, circulation service, persistence and reports
- library: the ``Library`` aggregate that owns one catalog
- config: Configuration management with pydantic-settings
- tools / resources / server: the FastMCP front end
"""

__version__ = "0.1.0"

from .library import Library, open_library

__all__ = [
    "Library",
    "__version__",
    "open_library",
]
