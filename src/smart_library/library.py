"""
The Library aggregate.

A ``Library`` owns one book index (with its title tree), one user registry,
the circulation service that ties them together and, optionally, the record
files it loads from and saves to. Every catalog operation goes through an
instance; nothing in the catalog is module-level state, so independent
libraries can live side by side.

Typical use:

```python
with open_library() as library:
    user = library.add_user("Alice")
    library.add_book("111", "Dune", "Frank Herbert", "Science Fiction")
    library.issue_book(user.id, "111")
# State is saved to the configured record files on exit
```
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from .catalog import reports
from .catalog.book_index import DEFAULT_TABLE_SIZE, BookIndex
from .catalog.circulation import DEFAULT_MAX_BORROWED, CirculationService
from .catalog.errors import PersistenceError
from .catalog.persistence import LoadSummary, PersistenceGateway
from .catalog.user_registry import DEFAULT_FIRST_USER_ID, UserRegistry
from .config import LibraryConfig, get_config
from .models.book import Book
from .models.circulation import CirculationReceipt
from .models.user import User

logger = logging.getLogger(__name__)


class Library:
    """
    Owns the catalog indexes and exposes every operation the front end needs.

    Args:
        table_size: Buckets in the ISBN hash table
        max_borrowed: Most books one user may hold
        first_user_id: Id of the first registered user
        most_borrowed_limit: Default length of the most borrowed report
        gateway: Record files for ``load``/``save``; None keeps the library
            purely in memory
    """

    def __init__(
        self,
        *,
        table_size: int = DEFAULT_TABLE_SIZE,
        max_borrowed: int = DEFAULT_MAX_BORROWED,
        first_user_id: int = DEFAULT_FIRST_USER_ID,
        most_borrowed_limit: int = reports.DEFAULT_MOST_BORROWED_LIMIT,
        gateway: PersistenceGateway | None = None,
    ):
        self.books = BookIndex(table_size)
        self.users = UserRegistry(first_user_id)
        self.circulation = CirculationService(self.books, self.users, max_borrowed)
        self.most_borrowed_limit = most_borrowed_limit
        self.gateway = gateway

    @classmethod
    def from_config(cls, config: LibraryConfig | None = None) -> "Library":
        """Build an empty library wired to the configured record files."""
        config = config or get_config()
        return cls(
            table_size=config.hash_table_size,
            max_borrowed=config.max_borrowed_per_user,
            first_user_id=config.first_user_id,
            most_borrowed_limit=config.most_borrowed_limit,
            gateway=PersistenceGateway(config.books_file, config.users_file),
        )

    # === Books ===

    def add_book(self, isbn: str, title: str, author: str = "", genre: str = "") -> Book:
        """
        Catalog a new, available book.

        Raises:
            pydantic.ValidationError: If a field is empty, too long or unsafe
            DuplicateIsbnError: If the ISBN is already catalogued
        """
        book = Book(isbn=isbn, title=title, author=author, genre=genre)
        return self.books.insert(book)

    def remove_book(self, isbn: str) -> Book:
        """
        Raises:
            BookNotFoundError: If no book has this ISBN
            BookBorrowedError: If the book is currently out
        """
        return self.books.remove(isbn)

    def find_book(self, isbn: str) -> Book | None:
        return self.books.find_by_isbn(isbn)

    def get_book(self, isbn: str) -> Book:
        return self.books.get(isbn)

    def find_book_by_title(self, title: str) -> Book | None:
        return self.books.find_by_title(title)

    def search_titles(self, prefix: str) -> list[Book]:
        return self.books.search_titles(prefix)

    def find_books_by_author(self, author: str) -> list[Book]:
        return self.books.find_by_author(author)

    def list_books(self) -> list[Book]:
        """All books in alphabetical title order."""
        return self.books.list_alphabetical()

    def list_available_books(self) -> list[Book]:
        return self.books.list_available()

    # === Users ===

    def add_user(self, name: str) -> User:
        return self.users.add(name)

    def remove_user(self, user_id: int) -> User:
        """
        Raises:
            UserNotFoundError: If no user has this id
            HasActiveLoansError: If the user still holds books
        """
        return self.users.remove(user_id)

    def find_user(self, user_id: int) -> User | None:
        return self.users.find_by_id(user_id)

    def get_user(self, user_id: int) -> User:
        return self.users.get(user_id)

    def list_users(self) -> list[User]:
        """Users in registry order (most recently registered first)."""
        return self.users.list_all()

    def books_held_by(self, user_id: int) -> list[Book]:
        """
        Books the user holds, oldest loan first; unknown ISBNs are skipped.

        Raises:
            UserNotFoundError: If no user has this id
        """
        user = self.users.get(user_id)
        return [
            book
            for book in (self.books.find_by_isbn(isbn) for isbn in user.borrowed_books)
            if book is not None
        ]

    # === Circulation ===

    def issue_book(self, user_id: int, isbn: str) -> CirculationReceipt:
        return self.circulation.issue(user_id, isbn)

    def return_book(self, user_id: int, isbn: str) -> CirculationReceipt:
        return self.circulation.return_book(user_id, isbn)

    # === Reports ===

    def most_borrowed(self, limit: int | None = None) -> list[reports.PopularBookEntry]:
        return reports.most_borrowed(
            self.books, self.most_borrowed_limit if limit is None else limit
        )

    def active_users(self) -> list[reports.ActiveUserEntry]:
        return reports.active_users(self.users)

    def borrowed_books(self) -> list[reports.LoanEntry]:
        return reports.borrowed_books(self.books, self.users)

    def summary(self) -> reports.CatalogSummary:
        return reports.summary(self.books, self.users)

    def audit(self) -> list[str]:
        """Availability/borrowed-list disagreements (empty when consistent)."""
        return reports.find_inconsistencies(self.books, self.users)

    # === Persistence ===

    def clear(self) -> None:
        self.books.clear()
        self.users.clear()

    def load(self) -> tuple[LoadSummary, LoadSummary]:
        """
        Replace the in-memory state with the contents of the record files.

        Books are loaded before users. Unreadable files and bad lines are
        logged and skipped, never raised.

        Raises:
            PersistenceError: If the library has no record files
        """
        gateway = self._require_gateway()
        self.clear()
        book_summary = gateway.load_books(self.books)
        user_summary = gateway.load_users(self.users, self.books)

        for problem in self.audit():
            logger.warning("Inconsistent record files: %s", problem)

        return book_summary, user_summary

    def save(self) -> None:
        """
        Write books then users to the record files.

        Raises:
            PersistenceError: If there are no record files or a write fails
        """
        gateway = self._require_gateway()
        gateway.save_books(self.books)
        gateway.save_users(self.users)

    def _require_gateway(self) -> PersistenceGateway:
        if self.gateway is None:
            raise PersistenceError("This library has no record files configured")
        return self.gateway


@contextmanager
def open_library(config: LibraryConfig | None = None) -> Generator[Library, None, None]:
    """
    Load a library from its record files and save it again on exit.

    A failed save is logged, not raised.
    """
    library = Library.from_config(config)
    library.load()
    try:
        yield library
    finally:
        try:
            library.save()
            logger.debug("Library state saved")
        except PersistenceError:
            logger.exception("Failed to save library state")


# === Front-end Library Instance ===


class _LibraryStore:
    """Internal storage for the library the front end serves."""

    _instance: Library | None = None


def get_library() -> Library:
    """
    Get the library served by the front end.

    If none has been installed, one is built from configuration and loaded.
    """
    if _LibraryStore._instance is None:  # type: ignore[reportPrivateUsage]
        library = Library.from_config()
        library.load()
        _LibraryStore._instance = library  # type: ignore[reportPrivateUsage]
    return _LibraryStore._instance  # type: ignore[reportPrivateUsage]


def set_library(library: Library) -> None:
    _LibraryStore._instance = library  # type: ignore[reportPrivateUsage]


def reset_library() -> None:
    """Forget the installed library (useful for testing)."""
    _LibraryStore._instance = None  # type: ignore[reportPrivateUsage]
