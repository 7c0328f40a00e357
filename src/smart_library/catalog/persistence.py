"""
Record file persistence for the Smart Library catalog.

State is kept in two UTF-8 text files with one pipe-delimited record per line:

    books:  isbn|title|author|genre|available|borrowCount
    users:  id|name|borrowedCount|isbn1|...|isbnN

``available`` is written as 1 or 0; any non-zero integer reads back as
available. Fields are not escaped, which is why the models refuse ``|`` and
line breaks in text fields.

Loading is forgiving: a missing or unreadable file means "start empty", and a
bad line (including one that is not valid UTF-8) is skipped on its own with a
warning. Saving is strict and raises
``PersistenceError`` so the caller can report the failure.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from ..models.book import Book
from ..models.user import User
from .book_index import BookIndex
from .errors import (
    DuplicateIsbnError,
    DuplicateUserError,
    PersistenceError,
    RecordFormatError,
)
from .user_registry import UserRegistry

logger = logging.getLogger(__name__)

FIELD_SEPARATOR = "|"
BOOK_FIELD_COUNT = 6
USER_FIXED_FIELD_COUNT = 3


class LoadSummary(BaseModel):
    """Counts reported after reading one record file."""

    path: Path = Field(..., description="File that was read")
    loaded: int = Field(default=0, description="Records added to the catalog", ge=0)
    skipped: int = Field(default=0, description="Lines rejected as malformed or duplicate", ge=0)
    found: bool = Field(default=True, description="Whether the file existed and was readable")


# =============================================================================
# RECORD CODEC
# =============================================================================


def _validation_reason(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]


def format_book_record(book: Book) -> str:
    return FIELD_SEPARATOR.join(
        [
            book.isbn,
            book.title,
            book.author,
            book.genre,
            "1" if book.available else "0",
            str(book.borrow_count),
        ]
    )


def parse_book_record(line: str) -> Book:
    """
    Parse one books-file line.

    Raises:
        RecordFormatError: Wrong field count, non-integer numbers, or field
            values the Book model rejects
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != BOOK_FIELD_COUNT:
        raise RecordFormatError(line, f"expected {BOOK_FIELD_COUNT} fields, got {len(fields)}")

    isbn, title, author, genre, available, borrow_count = fields
    try:
        available_flag = int(available)
        count = int(borrow_count)
    except ValueError:
        raise RecordFormatError(line, "available and borrow count must be integers") from None

    try:
        return Book(
            isbn=isbn,
            title=title,
            author=author,
            genre=genre,
            available=available_flag != 0,
            borrow_count=count,
        )
    except ValidationError as e:
        raise RecordFormatError(line, _validation_reason(e)) from e


def format_user_record(user: User) -> str:
    return FIELD_SEPARATOR.join(
        [str(user.id), user.name, str(user.borrowed_count), *user.borrowed_books]
    )


def parse_user_record(line: str) -> User:
    """
    Parse one users-file line.

    Raises:
        RecordFormatError: Too few fields, non-integer id or count, a count
            that does not match the number of trailing ISBNs, or values the
            User model rejects
    """
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) < USER_FIXED_FIELD_COUNT:
        raise RecordFormatError(
            line, f"expected at least {USER_FIXED_FIELD_COUNT} fields, got {len(fields)}"
        )

    try:
        user_id = int(fields[0])
        borrowed_count = int(fields[2])
    except ValueError:
        raise RecordFormatError(line, "id and borrowed count must be integers") from None

    isbns = fields[USER_FIXED_FIELD_COUNT:]
    if borrowed_count != len(isbns):
        raise RecordFormatError(
            line, f"borrowed count {borrowed_count} does not match {len(isbns)} ISBN field(s)"
        )

    try:
        return User(id=user_id, name=fields[1], borrowed_books=isbns)
    except ValidationError as e:
        raise RecordFormatError(line, _validation_reason(e)) from e


def _decode_line(raw: bytes) -> str:
    try:
        return raw.decode("utf-8").rstrip("\r")
    except UnicodeDecodeError:
        raise RecordFormatError(raw.decode("utf-8", errors="replace"), "not valid UTF-8") from None


# =============================================================================
# GATEWAY
# =============================================================================


class PersistenceGateway:
    """
    Reads and writes the books and users record files.

    Args:
        books_path: Books record file
        users_path: Users record file
    """

    def __init__(self, books_path: Path, users_path: Path):
        self.books_path = Path(books_path)
        self.users_path = Path(users_path)

    # === Save ===

    def save_books(self, books: BookIndex) -> int:
        """
        Write every book in scan order.

        Returns:
            Number of records written

        Raises:
            PersistenceError: If the file cannot be written
        """
        lines = [format_book_record(book) for book in books]
        self._write_lines(self.books_path, lines)
        logger.info("Saved %d book(s) to %s", len(lines), self.books_path)
        return len(lines)

    def save_users(self, users: UserRegistry) -> int:
        """
        Write every user in registry order.

        Returns:
            Number of records written

        Raises:
            PersistenceError: If the file cannot be written
        """
        lines = [format_user_record(user) for user in users]
        self._write_lines(self.users_path, lines)
        logger.info("Saved %d user(s) to %s", len(lines), self.users_path)
        return len(lines)

    # === Load ===

    def load_books(self, books: BookIndex) -> LoadSummary:
        """Insert every valid record of the books file into ``books``."""
        lines = self._read_lines(self.books_path)
        summary = LoadSummary(path=self.books_path, found=lines is not None)

        for line_no, line in enumerate(lines or [], start=1):
            if not line.strip():
                continue
            try:
                books.insert(parse_book_record(_decode_line(line)))
            except (RecordFormatError, DuplicateIsbnError) as e:
                logger.warning("%s:%d skipped: %s", self.books_path.name, line_no, e)
                summary.skipped += 1
            else:
                summary.loaded += 1

        logger.info(
            "Loaded %d book(s) from %s (%d skipped)",
            summary.loaded,
            self.books_path,
            summary.skipped,
        )
        return summary

    def load_users(self, users: UserRegistry, books: BookIndex | None = None) -> LoadSummary:
        """
        Append every valid record of the users file to ``users``.

        Borrowed ISBNs are kept even when ``books`` has no such book; the
        mismatch is only logged.
        """
        lines = self._read_lines(self.users_path)
        summary = LoadSummary(path=self.users_path, found=lines is not None)

        for line_no, line in enumerate(lines or [], start=1):
            if not line.strip():
                continue
            try:
                user = users.restore(parse_user_record(_decode_line(line)))
            except (RecordFormatError, DuplicateUserError) as e:
                logger.warning("%s:%d skipped: %s", self.users_path.name, line_no, e)
                summary.skipped += 1
                continue

            summary.loaded += 1
            if books is not None:
                for isbn in user.borrowed_books:
                    if isbn not in books:
                        logger.warning(
                            "User %d holds ISBN %s which is not in the catalog", user.id, isbn
                        )

        logger.info(
            "Loaded %d user(s) from %s (%d skipped), next user id %d",
            summary.loaded,
            self.users_path,
            summary.skipped,
            users.next_id,
        )
        return summary

    # === File helpers ===

    def _read_lines(self, path: Path) -> list[bytes] | None:
        """
        Raw lines of ``path``, or None if it is missing or unreadable.

        Lines are decoded one at a time by the loaders so that a single bad
        byte only costs its own record.
        """
        if not path.exists():
            logger.info("No record file at %s, starting empty", path)
            return None

        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning("Could not read %s, starting empty: %s", path, e)
            return None

        return data.split(b"\n")

    def _write_lines(self, path: Path, lines: list[str]) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="\n") as handle:
                for line in lines:
                    handle.write(line)
                    handle.write("\n")
        except OSError as e:
            raise PersistenceError(f"Error writing {path}: {e}") from e
