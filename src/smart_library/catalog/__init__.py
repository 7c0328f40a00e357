"""
Catalog package for the Smart Library.

This package provides the in-memory indexes and the services around them:
- ISBN hash table with a title tree alongside (book_index.py, title_index.py)
- Insertion-ordered user registry with id assignment (user_registry.py)
- Issue/return transitions (circulation.py)
- Record file load/save (persistence.py)
- Read-only reports (reports.py)

All catalog exceptions derive from ``CatalogError`` (errors.py).
"""

from .book_index import BookIndex, isbn_hash
from .circulation import CirculationService
from .errors import (
    BookBorrowedError,
    BookNotFoundError,
    BookUnavailableError,
    BorrowLimitReachedError,
    CatalogError,
    DuplicateIsbnError,
    DuplicateUserError,
    HasActiveLoansError,
    NotBorrowedByUserError,
    NotFoundError,
    PersistenceError,
    RecordFormatError,
    UserNotFoundError,
)
from .persistence import LoadSummary, PersistenceGateway
from .title_index import TitleIndex
from .user_registry import UserRegistry

__all__ = [
    "BookBorrowedError",
    "BookIndex",
    "BookNotFoundError",
    "BookUnavailableError",
    "BorrowLimitReachedError",
    "CatalogError",
    "CirculationService",
    "DuplicateIsbnError",
    "DuplicateUserError",
    "HasActiveLoansError",
    "LoadSummary",
    "NotBorrowedByUserError",
    "NotFoundError",
    "PersistenceError",
    "PersistenceGateway",
    "RecordFormatError",
    "TitleIndex",
    "UserNotFoundError",
    "UserRegistry",
    "isbn_hash",
]
