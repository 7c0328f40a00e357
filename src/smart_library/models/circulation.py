"""
Circulation models for the Smart Library catalog.

A receipt is produced by every successful issue or return. It is a snapshot:
later changes to the book or user do not alter a receipt already handed out.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CirculationAction(str, Enum):
    """Kind of circulation transition."""

    ISSUE = "issue"
    RETURN = "return"


class CirculationReceipt(BaseModel):
    """Outcome of a successful issue or return."""

    action: CirculationAction = Field(..., description="Which transition happened")
    user_id: int = Field(..., description="Borrower id")
    user_name: str = Field(..., description="Borrower display name")
    isbn: str = Field(..., description="ISBN of the book")
    title: str = Field(..., description="Title of the book")
    borrow_count: int = Field(..., description="Book borrow count after the transition", ge=0)
    borrowed_count: int = Field(
        ..., description="Number of books the user holds after the transition", ge=0
    )

    @property
    def message(self) -> str:
        """One-line summary suitable for display."""
        if self.action == CirculationAction.ISSUE:
            return f"Book '{self.title}' issued to user '{self.user_name}' successfully."
        return f"Book '{self.title}' returned by user '{self.user_name}' successfully."

    model_config = ConfigDict(
        use_enum_values=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "action": "issue",
                "user_id": 1001,
                "user_name": "Alice",
                "isbn": "111",
                "title": "Dune",
                "borrow_count": 1,
                "borrowed_count": 1,
            }
        },
    )
