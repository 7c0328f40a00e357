"""
Circulation tools for the Smart Library server.

1. issue_book: lend a book to a registered user
2. return_book: take a book back from the user holding it

Both validate their arguments with a pydantic input model, run the operation
against the served ``Library`` and translate catalog errors into ``isError``
responses. The catalog guarantees a rejected call changed nothing.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..catalog.errors import CatalogError, NotFoundError
from ..library import get_library
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT SCHEMA
# =============================================================================


class CirculationInput(BaseModel):
    """Input schema shared by issue_book and return_book."""

    user_id: int = Field(
        ...,
        description="Id of the registered user",
        ge=1,
        examples=[1001, 1002],
    )

    isbn: str = Field(
        ...,
        description="ISBN of the book",
        min_length=1,
        max_length=20,
        examples=["9780441013593", "111"],
    )


# =============================================================================
# HANDLERS
# =============================================================================


async def issue_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the issue_book tool.

    Rejections, in the order they are checked: unknown user, unknown book,
    book already out, user at the borrowing limit.
    """
    try:
        try:
            params = CirculationInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid issue parameters: %s", e)
            return error_response(f"Invalid issue parameters: {e}")

        try:
            receipt = get_library().issue_book(params.user_id, params.isbn)
        except NotFoundError as e:
            logger.info("Issue failed - not found: %s", e)
            return error_response(str(e))
        except CatalogError as e:
            logger.info("Issue failed - business rule: %s", e)
            return error_response(str(e))

        return success_response(receipt.message, {"receipt": receipt.model_dump()})

    except Exception as e:
        logger.exception("Unexpected error in issue_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")


async def return_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """
    Handler for the return_book tool.

    The book's borrow count is not reduced; it counts every loan ever made.
    """
    try:
        try:
            params = CirculationInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid return parameters: %s", e)
            return error_response(f"Invalid return parameters: {e}")

        try:
            receipt = get_library().return_book(params.user_id, params.isbn)
        except CatalogError as e:
            logger.info("Return failed: %s", e)
            return error_response(str(e))

        return success_response(receipt.message, {"receipt": receipt.model_dump()})

    except Exception as e:
        logger.exception("Unexpected error in return_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")


# =============================================================================
# TOOL EXPORTS
# =============================================================================

issue_book = {
    "name": "issue_book",
    "description": (
        "Issue a book to a registered user. Fails if the user or book does not exist, "
        "if the book is already borrowed, or if the user holds the maximum number of books."
    ),
    "inputSchema": CirculationInput.model_json_schema(),
    "handler": issue_book_handler,
}

return_book = {
    "name": "return_book",
    "description": (
        "Return a book held by a user. The book becomes available again; its lifetime "
        "borrow count is kept."
    ),
    "inputSchema": CirculationInput.model_json_schema(),
    "handler": return_book_handler,
}
