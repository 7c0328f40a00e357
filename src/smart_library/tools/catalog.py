"""
Catalog maintenance tools for the Smart Library server.

1. add_book / remove_book: manage the book index
2. add_user / remove_user: manage the user registry

Removal is refused while a book is out or while a user still holds books.
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from ..catalog.errors import CatalogError
from ..library import get_library
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


# =============================================================================
# INPUT SCHEMAS
# =============================================================================


class AddBookInput(BaseModel):
    """Input schema for the add_book tool."""

    isbn: str = Field(..., description="Unique ISBN", min_length=1, max_length=20)
    title: str = Field(..., description="Book title", min_length=1, max_length=100)
    author: str = Field(default="", description="Author name", max_length=50)
    genre: str = Field(default="", description="Genre", max_length=30)


class RemoveBookInput(BaseModel):
    """Input schema for the remove_book tool."""

    isbn: str = Field(..., description="ISBN of the book to remove", min_length=1, max_length=20)


class AddUserInput(BaseModel):
    """Input schema for the add_user tool."""

    name: str = Field(..., description="Display name", min_length=1, max_length=50)


class RemoveUserInput(BaseModel):
    """Input schema for the remove_user tool."""

    user_id: int = Field(..., description="Id of the user to remove", ge=1)


# =============================================================================
# HANDLERS
# =============================================================================


async def add_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the add_book tool."""
    try:
        params = AddBookInput.model_validate(arguments)
        book = get_library().add_book(params.isbn, params.title, params.author, params.genre)
    except ValidationError as e:
        logger.warning("Invalid book parameters: %s", e)
        return error_response(f"Invalid book parameters: {e}")
    except CatalogError as e:
        logger.info("Add book failed: %s", e)
        return error_response(str(e))
    except Exception as e:
        logger.exception("Unexpected error in add_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")

    return success_response(f"Book '{book.title}' added successfully.", {"book": book.model_dump()})


async def remove_book_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the remove_book tool."""
    try:
        params = RemoveBookInput.model_validate(arguments)
        book = get_library().remove_book(params.isbn)
    except ValidationError as e:
        logger.warning("Invalid remove_book parameters: %s", e)
        return error_response(f"Invalid remove_book parameters: {e}")
    except CatalogError as e:
        logger.info("Remove book failed: %s", e)
        return error_response(str(e))
    except Exception as e:
        logger.exception("Unexpected error in remove_book tool")
        return error_response(f"An unexpected error occurred: {e!s}")

    return success_response(
        f"Book '{book.title}' (ISBN: {book.isbn}) removed successfully.",
        {"book": book.model_dump()},
    )


async def add_user_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the add_user tool."""
    try:
        params = AddUserInput.model_validate(arguments)
        user = get_library().add_user(params.name)
    except ValidationError as e:
        logger.warning("Invalid user parameters: %s", e)
        return error_response(f"Invalid user parameters: {e}")
    except Exception as e:
        logger.exception("Unexpected error in add_user tool")
        return error_response(f"An unexpected error occurred: {e!s}")

    return success_response(
        f"User '{user.name}' added successfully with ID: {user.id}",
        {"user": user.model_dump()},
    )


async def remove_user_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the remove_user tool."""
    try:
        params = RemoveUserInput.model_validate(arguments)
        user = get_library().remove_user(params.user_id)
    except ValidationError as e:
        logger.warning("Invalid remove_user parameters: %s", e)
        return error_response(f"Invalid remove_user parameters: {e}")
    except CatalogError as e:
        logger.info("Remove user failed: %s", e)
        return error_response(str(e))
    except Exception as e:
        logger.exception("Unexpected error in remove_user tool")
        return error_response(f"An unexpected error occurred: {e!s}")

    return success_response(
        f"User '{user.name}' (ID: {user.id}) removed successfully.",
        {"user": user.model_dump()},
    )


# =============================================================================
# TOOL EXPORTS
# =============================================================================

add_book = {
    "name": "add_book",
    "description": "Add a new book to the catalog. The ISBN must not already be catalogued.",
    "inputSchema": AddBookInput.model_json_schema(),
    "handler": add_book_handler,
}

remove_book = {
    "name": "remove_book",
    "description": "Remove a book from the catalog. Borrowed books cannot be removed.",
    "inputSchema": RemoveBookInput.model_json_schema(),
    "handler": remove_book_handler,
}

add_user = {
    "name": "add_user",
    "description": "Register a new user. Ids are assigned automatically, starting at 1001.",
    "inputSchema": AddUserInput.model_json_schema(),
    "handler": add_user_handler,
}

remove_user = {
    "name": "remove_user",
    "description": "Unregister a user. Users who still hold books cannot be removed.",
    "inputSchema": RemoveUserInput.model_json_schema(),
    "handler": remove_user_handler,
}
