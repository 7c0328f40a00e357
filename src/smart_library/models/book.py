"""
Book model for the Smart Library catalog.

A book is identified by its ISBN. The ISBN and the title are frozen once the
record exists: the ISBN keys the hash table and the title keys the title
tree, so changing either in place would silently break an index. Keys are
kept exactly as given; only author and genre have surrounding whitespace
stripped.

Text fields are stored in a pipe-delimited record file, so the separator and
line breaks are rejected at validation time rather than escaped.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Characters that would corrupt a pipe-delimited record line
RECORD_UNSAFE_CHARS = ("|", "\n", "\r")


def reject_record_unsafe(value: str) -> str:
    """Raise ValueError if ``value`` contains a record separator or line break."""
    for char in RECORD_UNSAFE_CHARS:
        if char in value:
            raise ValueError(f"must not contain {char!r}")
    return value


class Book(BaseModel):
    """
    Represents a book in the library catalog.

    ``available`` is False exactly while one user holds the book.
    ``borrow_count`` is a popularity counter: it grows on every issue and is
    never decremented on return.
    """

    isbn: str = Field(
        ...,
        description="Unique book identifier (any non-empty text, typically an ISBN)",
        min_length=1,
        max_length=20,
        frozen=True,
        examples=["9780441013593", "111"],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=100,
        frozen=True,
        examples=["Dune", "The Left Hand of Darkness"],
    )

    author: str = Field(
        default="",
        description="Author name as entered",
        max_length=50,
        examples=["Frank Herbert"],
    )

    genre: str = Field(
        default="",
        description="Literary genre or category",
        max_length=30,
        examples=["Science Fiction", "Biography"],
    )

    available: bool = Field(
        default=True,
        description="Whether the book is on the shelf",
    )

    borrow_count: int = Field(
        default=0,
        description="Total number of times the book has been issued",
        ge=0,
    )

    @field_validator("author", "genre", mode="before")
    @classmethod
    def strip_descriptive_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("isbn", "title", "author", "genre")
    @classmethod
    def validate_record_safe(cls, v: str) -> str:
        return reject_record_unsafe(v)

    @property
    def status(self) -> str:
        """Human-readable availability status."""
        return "Available" if self.available else "Borrowed"

    def mark_issued(self) -> None:
        """
        Take the book off the shelf and count the loan.

        Raises:
            ValueError: If the book is already out
        """
        if not self.available:
            raise ValueError(f"'{self.title}' is already borrowed")
        self.available = False
        self.borrow_count += 1

    def mark_returned(self) -> None:
        """
        Put the book back on the shelf.

        Raises:
            ValueError: If the book is not out
        """
        if self.available:
            raise ValueError(f"'{self.title}' is not borrowed")
        self.available = True

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "isbn": "9780441013593",
                "title": "Dune",
                "author": "Frank Herbert",
                "genre": "Science Fiction",
                "available": True,
                "borrow_count": 4,
            }
        },
    )
