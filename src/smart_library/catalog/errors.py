"""
Catalog exceptions.

Every business-rule violation raised by the catalog is a ``CatalogError``.
They are recoverable: the operation that raised leaves the catalog exactly as
it was, and the caller decides how to report it.
"""


class CatalogError(Exception):
    """Base exception for catalog operations."""


class NotFoundError(CatalogError):
    """Raised when a book or user does not exist."""


class BookNotFoundError(NotFoundError):
    """Raised when no book has the requested ISBN."""

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"Book with ISBN {isbn} not found")


class UserNotFoundError(NotFoundError):
    """Raised when no user has the requested id."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User ID {user_id} not found")


class DuplicateIsbnError(CatalogError):
    """Raised when inserting a book whose ISBN is already catalogued."""

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"Book with ISBN {isbn} already exists")


class DuplicateUserError(CatalogError):
    """Raised when restoring a user whose id is already registered."""

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User ID {user_id} already exists")


class BookBorrowedError(CatalogError):
    """Raised when removing a book that is currently out."""

    def __init__(self, isbn: str, title: str):
        self.isbn = isbn
        self.title = title
        super().__init__(f"Cannot remove book '{title}' (ISBN: {isbn}) as it is currently borrowed")


class HasActiveLoansError(CatalogError):
    """Raised when removing a user who still holds books."""

    def __init__(self, user_id: int, borrowed_count: int):
        self.user_id = user_id
        self.borrowed_count = borrowed_count
        super().__init__(
            f"Cannot remove user {user_id} as they still have {borrowed_count} borrowed book(s)"
        )


class BookUnavailableError(CatalogError):
    """Raised when issuing a book that is already out."""

    def __init__(self, isbn: str, title: str):
        self.isbn = isbn
        self.title = title
        super().__init__(f"Book '{title}' is not available for borrowing")


class BorrowLimitReachedError(CatalogError):
    """Raised when a user already holds the maximum number of books."""

    def __init__(self, user_id: int, limit: int):
        self.user_id = user_id
        self.limit = limit
        super().__init__(
            f"User {user_id} has reached the maximum number of books that can be borrowed ({limit})"
        )


class NotBorrowedByUserError(CatalogError):
    """Raised when returning a book the user does not hold."""

    def __init__(self, user_id: int, isbn: str):
        self.user_id = user_id
        self.isbn = isbn
        super().__init__(f"User {user_id} has not borrowed book with ISBN {isbn}")


class PersistenceError(CatalogError):
    """Raised when a record file cannot be written."""


class RecordFormatError(CatalogError):
    """Raised when a persisted record line cannot be parsed."""

    def __init__(self, line: str, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed record ({reason}): {line!r}")
