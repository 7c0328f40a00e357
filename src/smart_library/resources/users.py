"""User Resources - Registry Access

Resources:
- library://users/list - Every registered user, most recent first
- library://users/{user_id} - One user with the books they hold
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..catalog.errors import UserNotFoundError
from ..library import get_library
from ..models.book import Book
from ..models.user import User

logger = logging.getLogger(__name__)


class UserSummary(BaseModel):
    """A user as shown in the registry listing."""

    id: int = Field(..., description="User id")
    name: str = Field(..., description="Display name")
    borrowed_count: int = Field(..., description="Books currently held")


class UserListResponse(BaseModel):
    users: list[UserSummary] = Field(..., description="Users in registry order")
    total: int = Field(..., description="Number of registered users")


class UserDetailResponse(BaseModel):
    user: User = Field(..., description="The user record")
    borrowed_count: int = Field(..., description="Books currently held")
    books: list[Book] = Field(..., description="Catalogued books the user holds, oldest loan first")


async def list_users_handler() -> dict[str, Any]:
    """Returns the registry in its stored order."""
    try:
        users = get_library().list_users()
        summaries = [
            UserSummary(id=user.id, name=user.name, borrowed_count=user.borrowed_count)
            for user in users
        ]
        return UserListResponse(users=summaries, total=len(summaries)).model_dump()
    except Exception as e:
        logger.exception("Error in users/list resource")
        raise ResourceError(f"Failed to retrieve user list: {e!s}") from e


async def get_user_handler(user_id: str) -> dict[str, Any]:
    """Returns one user and the books they hold."""
    logger.debug("Resource request - users/%s", user_id)
    try:
        numeric_id = int(user_id)
    except ValueError:
        raise ResourceError(f"Invalid user id: {user_id}") from None

    library = get_library()
    try:
        user = library.get_user(numeric_id)
        books = library.books_held_by(numeric_id)
    except UserNotFoundError as e:
        raise ResourceError(f"User not found: {numeric_id}") from e
    except Exception as e:
        logger.exception("Error in users/{user_id} resource")
        raise ResourceError(f"Failed to retrieve user details: {e!s}") from e

    return UserDetailResponse(
        user=user, borrowed_count=user.borrowed_count, books=books
    ).model_dump()


user_resources: list[dict[str, Any]] = [
    {
        "uri": "library://users/list",
        "name": "User Registry",
        "description": "Every registered user with the number of books they hold.",
        "mime_type": "application/json",
        "handler": list_users_handler,
    },
    {
        "uri_template": "library://users/{user_id}",
        "name": "User Details",
        "description": "A registered user and the books they currently hold.",
        "mime_type": "application/json",
        "handler": get_user_handler,
    },
]
