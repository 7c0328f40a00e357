"""Book Resources - Catalog Access

Read-only views of the book index.

Resources:
- library://books/list - Every book, alphabetical by title
- library://books/available - Books on the shelf
- library://books/borrowed - Books that are out, with their borrowers
- library://books/{isbn} - One book by ISBN
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..catalog.reports import LoanEntry
from ..library import get_library
from ..models.book import Book

logger = logging.getLogger(__name__)


class BookListResponse(BaseModel):
    """Response schema for book listings."""

    books: list[Book] = Field(..., description="Books in listing order")
    total: int = Field(..., description="Number of books listed")


class LoanListResponse(BaseModel):
    """Response schema for the borrowed books listing."""

    loans: list[LoanEntry] = Field(..., description="Current loans")
    total: int = Field(..., description="Number of loans")


async def list_books_handler() -> dict[str, Any]:
    """Returns the whole catalog in title order."""
    try:
        books = get_library().list_books()
        return BookListResponse(books=books, total=len(books)).model_dump()
    except Exception as e:
        logger.exception("Error in books/list resource")
        raise ResourceError(f"Failed to retrieve book list: {e!s}") from e


async def list_available_books_handler() -> dict[str, Any]:
    """Returns the books that can be issued right now."""
    try:
        books = get_library().list_available_books()
        return BookListResponse(books=books, total=len(books)).model_dump()
    except Exception as e:
        logger.exception("Error in books/available resource")
        raise ResourceError(f"Failed to retrieve available books: {e!s}") from e


async def list_borrowed_books_handler() -> dict[str, Any]:
    """Returns every current loan with the borrower's id and name."""
    try:
        loans = get_library().borrowed_books()
        return LoanListResponse(loans=loans, total=len(loans)).model_dump()
    except Exception as e:
        logger.exception("Error in books/borrowed resource")
        raise ResourceError(f"Failed to retrieve borrowed books: {e!s}") from e


async def get_book_handler(isbn: str) -> dict[str, Any]:
    """Returns details for a specific book."""
    logger.debug("Resource request - books/%s", isbn)
    try:
        book = get_library().find_book(isbn)
    except Exception as e:
        logger.exception("Error in books/{isbn} resource")
        raise ResourceError(f"Failed to retrieve book details: {e!s}") from e

    if book is None:
        raise ResourceError(f"Book not found: {isbn}")
    return book.model_dump()


book_resources: list[dict[str, Any]] = [
    {
        "uri": "library://books/list",
        "name": "Book Catalog",
        "description": "Every book in the catalog, alphabetical by title.",
        "mime_type": "application/json",
        "handler": list_books_handler,
    },
    {
        "uri": "library://books/available",
        "name": "Available Books",
        "description": "Books currently on the shelf.",
        "mime_type": "application/json",
        "handler": list_available_books_handler,
    },
    {
        "uri": "library://books/borrowed",
        "name": "Borrowed Books",
        "description": "Books currently out, with the id and name of the borrower.",
        "mime_type": "application/json",
        "handler": list_borrowed_books_handler,
    },
    {
        "uri_template": "library://books/{isbn}",
        "name": "Book Details",
        "description": "Details of a single book by ISBN.",
        "mime_type": "application/json",
        "handler": get_book_handler,
    },
]
