"""
User model for the Smart Library catalog.

A user is a registered borrower. Ids are assigned by the user registry and
never change; the borrowed list keeps ISBNs in the order they were issued,
exactly as the catalog keys them.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .book import reject_record_unsafe


class User(BaseModel):
    """
    Represents a registered library user.

    The borrowing limit is catalog policy and is enforced by the circulation
    service, not by this model.
    """

    id: int = Field(
        ...,
        description="Registry-assigned user id",
        ge=1,
        frozen=True,
        examples=[1001, 1002],
    )

    name: str = Field(
        ...,
        description="Display name of the user",
        min_length=1,
        max_length=50,
        examples=["Alice", "Bob Smith"],
    )

    borrowed_books: list[str] = Field(
        default_factory=list,
        description="ISBNs currently held by the user, oldest loan first",
        examples=[["111", "9780441013593"]],
    )

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return reject_record_unsafe(v)

    @field_validator("borrowed_books")
    @classmethod
    def validate_borrowed_books(cls, v: list[str]) -> list[str]:
        for isbn in v:
            if not isbn:
                raise ValueError("borrowed ISBNs must not be empty")
            reject_record_unsafe(isbn)
        return v

    @property
    def borrowed_count(self) -> int:
        """Number of books currently held."""
        return len(self.borrowed_books)

    @property
    def has_active_loans(self) -> bool:
        return bool(self.borrowed_books)

    def has_borrowed(self, isbn: str) -> bool:
        """Check whether ``isbn`` is in the user's borrowed list."""
        return isbn in self.borrowed_books

    def add_loan(self, isbn: str) -> None:
        """Append ``isbn`` to the borrowed list."""
        self.borrowed_books.append(isbn)

    def remove_loan(self, isbn: str) -> None:
        """
        Remove ``isbn`` from the borrowed list, keeping the order of the rest.

        Raises:
            ValueError: If the user does not hold the book
        """
        if isbn not in self.borrowed_books:
            raise ValueError(f"User {self.id} has not borrowed {isbn}")
        self.borrowed_books.remove(isbn)

    model_config = ConfigDict(
        validate_assignment=True,
        extra="forbid",
        json_schema_extra={
            "example": {
                "id": 1001,
                "name": "Alice",
                "borrowed_books": ["111"],
            }
        },
    )
