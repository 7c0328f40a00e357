"""
Circulation service for the Smart Library catalog.

Issue and return are the only operations that touch a book and a user
together. Both validate everything first and mutate only after every check
has passed, so a failed call leaves the catalog unchanged.

The pairing between a book and its borrower is carried by two facts that must
agree: ``Book.available`` is False, and the ISBN is in exactly one user's
borrowed list.
"""

import logging

from ..models.circulation import CirculationAction, CirculationReceipt
from .book_index import BookIndex
from .errors import (
    BookNotFoundError,
    BookUnavailableError,
    BorrowLimitReachedError,
    NotBorrowedByUserError,
    UserNotFoundError,
)
from .user_registry import UserRegistry

logger = logging.getLogger(__name__)

DEFAULT_MAX_BORROWED = 10


class CirculationService:
    """
    Issues and returns books.

    Args:
        books: The book index
        users: The user registry
        max_borrowed: Most books a single user may hold at once
    """

    def __init__(
        self,
        books: BookIndex,
        users: UserRegistry,
        max_borrowed: int = DEFAULT_MAX_BORROWED,
    ):
        if max_borrowed < 1:
            raise ValueError("max_borrowed must be at least 1")
        self.books = books
        self.users = users
        self.max_borrowed = max_borrowed

    def issue(self, user_id: int, isbn: str) -> CirculationReceipt:
        """
        Lend a book to a user.

        Checks run in this order and the first failure is raised:

        Raises:
            UserNotFoundError: No user has ``user_id``
            BookNotFoundError: No book has ``isbn``
            BookUnavailableError: The book is already out
            BorrowLimitReachedError: The user already holds ``max_borrowed`` books
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        book = self.books.find_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn)

        if not book.available:
            raise BookUnavailableError(isbn, book.title)

        if user.borrowed_count >= self.max_borrowed:
            raise BorrowLimitReachedError(user_id, self.max_borrowed)

        user.add_loan(isbn)
        book.mark_issued()

        logger.info("Book '%s' issued to user '%s' (ID: %d)", book.title, user.name, user.id)
        return CirculationReceipt(
            action=CirculationAction.ISSUE,
            user_id=user.id,
            user_name=user.name,
            isbn=book.isbn,
            title=book.title,
            borrow_count=book.borrow_count,
            borrowed_count=user.borrowed_count,
        )

    def return_book(self, user_id: int, isbn: str) -> CirculationReceipt:
        """
        Take a book back from a user.

        The book's borrow count is left as is.

        Raises:
            UserNotFoundError: No user has ``user_id``
            BookNotFoundError: No book has ``isbn``
            NotBorrowedByUserError: The user does not hold this book
        """
        user = self.users.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        book = self.books.find_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn)

        if not user.has_borrowed(isbn):
            raise NotBorrowedByUserError(user_id, isbn)

        user.remove_loan(isbn)
        if not book.available:
            book.mark_returned()
        else:
            # Only reachable after loading inconsistent record files
            logger.warning("Book %s was returned by user %d but was not marked out", isbn, user_id)

        logger.info("Book '%s' returned by user '%s' (ID: %d)", book.title, user.name, user.id)
        return CirculationReceipt(
            action=CirculationAction.RETURN,
            user_id=user.id,
            user_name=user.name,
            isbn=book.isbn,
            title=book.title,
            borrow_count=book.borrow_count,
            borrowed_count=user.borrowed_count,
        )

    def holder_of(self, isbn: str) -> int | None:
        """Id of the user holding ``isbn``, or None if nobody does."""
        for user in self.users:
            if user.has_borrowed(isbn):
                return user.id
        return None
