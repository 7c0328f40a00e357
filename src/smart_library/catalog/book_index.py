"""
Book index for the Smart Library catalog.

The index owns every book record and provides:

1. **Exact lookup**: a fixed-size hash table keyed by ISBN, collisions
   resolved by chaining (new entries go to the front of their chain)
2. **Alphabetical access**: a ``TitleIndex`` kept in step with the table on
   every insert and remove
3. **Full scans**: bucket order, then chain order, used by the reports

The table never grows. Its size is chosen once at construction and should be
a prime comfortably above the expected catalog size divided by a small load
factor.
"""

import logging
from collections.abc import Iterator

from ..models.book import Book
from .errors import BookBorrowedError, BookNotFoundError, DuplicateIsbnError
from .title_index import TitleIndex

logger = logging.getLogger(__name__)

DEFAULT_TABLE_SIZE = 101

_HASH_MASK = 0xFFFFFFFF


def isbn_hash(isbn: str, table_size: int = DEFAULT_TABLE_SIZE) -> int:
    """
    Map an ISBN to a bucket number.

    Computes ``h = h * 31 + byte`` over the UTF-8 bytes with 32-bit unsigned
    wrap-around, then reduces modulo ``table_size``.
    """
    h = 0
    for byte in isbn.encode("utf-8"):
        h = (h * 31 + byte) & _HASH_MASK
    return h % table_size


class BookIndex:
    """
    Hash table of books keyed by ISBN, with a title tree alongside.

    Args:
        table_size: Number of buckets (fixed for the lifetime of the index)
    """

    def __init__(self, table_size: int = DEFAULT_TABLE_SIZE):
        if table_size < 1:
            raise ValueError("table_size must be at least 1")
        self.table_size = table_size
        self._buckets: list[list[Book]] = [[] for _ in range(table_size)]
        self._count = 0
        self.titles = TitleIndex(self.find_by_isbn)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, isbn: object) -> bool:
        return isinstance(isbn, str) and self.find_by_isbn(isbn) is not None

    def __iter__(self) -> Iterator[Book]:
        """Scan every book in bucket order, then chain order."""
        for bucket in self._buckets:
            yield from bucket

    def bucket_of(self, isbn: str) -> int:
        return isbn_hash(isbn, self.table_size)

    # === Mutations ===

    def insert(self, book: Book) -> Book:
        """
        Add a book to the table and the title tree.

        Raises:
            DuplicateIsbnError: If the ISBN is already catalogued; the stored
                book is left untouched and ``book`` is not kept
        """
        bucket = self._buckets[self.bucket_of(book.isbn)]
        if any(existing.isbn == book.isbn for existing in bucket):
            logger.info("Book with ISBN %s already exists, not adding duplicate", book.isbn)
            raise DuplicateIsbnError(book.isbn)

        bucket.insert(0, book)
        self.titles.insert(book.title, book.isbn)
        self._count += 1

        logger.info("Book '%s' (ISBN: %s) added", book.title, book.isbn)
        return book

    def remove(self, isbn: str) -> Book:
        """
        Remove a book from the table and the title tree.

        Returns:
            The removed book

        Raises:
            BookNotFoundError: If no book has this ISBN
            BookBorrowedError: If the book is currently out
        """
        bucket = self._buckets[self.bucket_of(isbn)]
        for position, book in enumerate(bucket):
            if book.isbn == isbn:
                break
        else:
            raise BookNotFoundError(isbn)

        if not book.available:
            raise BookBorrowedError(isbn, book.title)

        del bucket[position]
        self.titles.remove(book.title, book.isbn)
        self._count -= 1

        logger.info("Book '%s' (ISBN: %s) removed", book.title, book.isbn)
        return book

    def clear(self) -> None:
        for bucket in self._buckets:
            bucket.clear()
        self.titles.clear()
        self._count = 0

    # === Lookups ===

    def find_by_isbn(self, isbn: str) -> Book | None:
        for book in self._buckets[self.bucket_of(isbn)]:
            if book.isbn == isbn:
                return book
        return None

    def get(self, isbn: str) -> Book:
        """
        Like ``find_by_isbn`` but raises instead of returning None.

        Raises:
            BookNotFoundError: If no book has this ISBN
        """
        book = self.find_by_isbn(isbn)
        if book is None:
            raise BookNotFoundError(isbn)
        return book

    def find_by_title(self, title: str) -> Book | None:
        logger.debug("Title lookup: %r", title)
        return self.titles.search(title)

    def search_titles(self, prefix: str) -> list[Book]:
        """Books whose title starts with ``prefix``, alphabetically."""
        return list(self.titles.search_prefix(prefix))

    def find_by_author(self, author: str) -> list[Book]:
        """Books whose author matches exactly (case-sensitive), in scan order."""
        return [book for book in self if book.author == author]

    # === Listings ===

    def list_all(self) -> list[Book]:
        """All books in scan order."""
        return list(self)

    def list_alphabetical(self) -> list[Book]:
        """All books in ascending title order."""
        return list(self.titles)

    def list_available(self) -> list[Book]:
        """Books on the shelf, in scan order."""
        return [book for book in self if book.available]

    def chain_lengths(self) -> list[int]:
        """Length of every bucket chain, for load-factor diagnostics."""
        return [len(bucket) for bucket in self._buckets]
