"""
Catalog reports.

Read-only queries over the book index and the user registry. None of these
functions mutate anything, and each returns plain pydantic entries the front
end can serialize directly.

Rankings sort descending on a single count and are stable: entries with equal
counts stay in the order the underlying scan produced them.
"""

from pydantic import BaseModel, Field

from ..models.book import Book
from ..models.user import User
from .book_index import BookIndex
from .user_registry import UserRegistry

DEFAULT_MOST_BORROWED_LIMIT = 10


class PopularBookEntry(BaseModel):
    """Entry in the most borrowed books report."""

    rank: int = Field(..., description="Popularity rank (1 = most borrowed)", ge=1)
    isbn: str = Field(..., description="Book ISBN")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    borrow_count: int = Field(..., description="Times the book has been issued", ge=1)
    available: bool = Field(..., description="Whether the book is on the shelf now")


class ActiveUserEntry(BaseModel):
    """Entry in the active users report."""

    user_id: int = Field(..., description="User id")
    name: str = Field(..., description="User display name")
    borrowed_count: int = Field(..., description="Books currently held", ge=1)


class LoanEntry(BaseModel):
    """A book that is out, with the user holding it."""

    isbn: str = Field(..., description="Book ISBN")
    title: str = Field(..., description="Book title")
    author: str = Field(..., description="Book author")
    user_id: int = Field(..., description="Borrower id")
    user_name: str = Field(..., description="Borrower display name")


class CatalogSummary(BaseModel):
    """Headline counts for the whole catalog."""

    total_books: int = Field(..., description="Books in the catalog", ge=0)
    available_books: int = Field(..., description="Books on the shelf", ge=0)
    borrowed_books: int = Field(..., description="Books currently out", ge=0)
    total_users: int = Field(..., description="Registered users", ge=0)
    active_users: int = Field(..., description="Users holding at least one book", ge=0)
    total_borrows: int = Field(..., description="Sum of all borrow counts", ge=0)


def most_borrowed(
    books: BookIndex, limit: int = DEFAULT_MOST_BORROWED_LIMIT
) -> list[PopularBookEntry]:
    """
    Up to ``limit`` books with a non-zero borrow count, most borrowed first.

    Raises:
        ValueError: If ``limit`` is negative
    """
    if limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")
    ranked: list[Book] = sorted(
        (book for book in books if book.borrow_count > 0),
        key=lambda book: book.borrow_count,
        reverse=True,
    )
    return [
        PopularBookEntry(
            rank=rank,
            isbn=book.isbn,
            title=book.title,
            author=book.author,
            borrow_count=book.borrow_count,
            available=book.available,
        )
        for rank, book in enumerate(ranked[:limit], start=1)
    ]


def active_users(users: UserRegistry) -> list[ActiveUserEntry]:
    """Users holding books, the heaviest borrowers first."""
    ranked: list[User] = sorted(
        (user for user in users if user.has_active_loans),
        key=lambda user: user.borrowed_count,
        reverse=True,
    )
    return [
        ActiveUserEntry(user_id=user.id, name=user.name, borrowed_count=user.borrowed_count)
        for user in ranked
    ]


def borrowed_books(books: BookIndex, users: UserRegistry) -> list[LoanEntry]:
    """
    Every current loan, in registry order then borrowed-list order.

    ISBNs that have no matching book are left out.
    """
    entries = []
    for user in users:
        for isbn in user.borrowed_books:
            book = books.find_by_isbn(isbn)
            if book is None:
                continue
            entries.append(
                LoanEntry(
                    isbn=book.isbn,
                    title=book.title,
                    author=book.author,
                    user_id=user.id,
                    user_name=user.name,
                )
            )
    return entries


def summary(books: BookIndex, users: UserRegistry) -> CatalogSummary:
    available = sum(1 for book in books if book.available)
    return CatalogSummary(
        total_books=len(books),
        available_books=available,
        borrowed_books=len(books) - available,
        total_users=len(users),
        active_users=sum(1 for user in users if user.has_active_loans),
        total_borrows=sum(book.borrow_count for book in books),
    )


def find_inconsistencies(books: BookIndex, users: UserRegistry) -> list[str]:
    """
    Describe every place where book availability and borrowed lists disagree.

    A consistent catalog returns an empty list. Problems can only come from
    record files edited or written outside this package.
    """
    problems = []
    holders: dict[str, list[int]] = {}
    for user in users:
        for isbn in dict.fromkeys(user.borrowed_books):
            holders.setdefault(isbn, []).append(user.id)
            if user.borrowed_books.count(isbn) > 1:
                problems.append(f"ISBN {isbn} is listed more than once by user {user.id}")

    for isbn, user_ids in holders.items():
        book = books.find_by_isbn(isbn)
        if book is None:
            problems.append(f"ISBN {isbn} is held by user(s) {user_ids} but is not catalogued")
        elif len(user_ids) > 1:
            problems.append(f"ISBN {isbn} is held by more than one user: {user_ids}")
        elif book.available:
            problems.append(f"ISBN {isbn} is held by user {user_ids[0]} but marked available")

    for book in books:
        if not book.available and book.isbn not in holders:
            problems.append(f"ISBN {book.isbn} is marked borrowed but nobody holds it")

    return problems
