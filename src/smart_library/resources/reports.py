"""Report Resources - Library Statistics

Resources:
- library://reports/most-borrowed - Most borrowed books (configured length)
- library://reports/active-users - Users holding books, heaviest borrowers first
- library://reports/summary - Headline counts
"""

import logging
from typing import Any

from fastmcp.exceptions import ResourceError
from pydantic import BaseModel, Field

from ..catalog.reports import ActiveUserEntry, PopularBookEntry
from ..library import get_library

logger = logging.getLogger(__name__)


class MostBorrowedResponse(BaseModel):
    books: list[PopularBookEntry] = Field(..., description="Ranked books")
    limit: int = Field(..., description="Maximum number of entries")


class ActiveUsersResponse(BaseModel):
    users: list[ActiveUserEntry] = Field(..., description="Ranked users")
    total: int = Field(..., description="Number of active users")


async def most_borrowed_handler() -> dict[str, Any]:
    try:
        library = get_library()
        entries = library.most_borrowed()
        return MostBorrowedResponse(books=entries, limit=library.most_borrowed_limit).model_dump()
    except Exception as e:
        logger.exception("Error in reports/most-borrowed resource")
        raise ResourceError(f"Failed to build most borrowed report: {e!s}") from e


async def active_users_handler() -> dict[str, Any]:
    try:
        entries = get_library().active_users()
        return ActiveUsersResponse(users=entries, total=len(entries)).model_dump()
    except Exception as e:
        logger.exception("Error in reports/active-users resource")
        raise ResourceError(f"Failed to build active users report: {e!s}") from e


async def summary_handler() -> dict[str, Any]:
    try:
        return get_library().summary().model_dump()
    except Exception as e:
        logger.exception("Error in reports/summary resource")
        raise ResourceError(f"Failed to build catalog summary: {e!s}") from e


report_resources: list[dict[str, Any]] = [
    {
        "uri": "library://reports/most-borrowed",
        "name": "Most Borrowed Books",
        "description": "Books ranked by how often they have been issued; unborrowed books are left out.",
        "mime_type": "application/json",
        "handler": most_borrowed_handler,
    },
    {
        "uri": "library://reports/active-users",
        "name": "Active Users",
        "description": "Users currently holding books, ranked by how many they hold.",
        "mime_type": "application/json",
        "handler": active_users_handler,
    },
    {
        "uri": "library://reports/summary",
        "name": "Catalog Summary",
        "description": "Counts of books, loans, users and total borrows.",
        "mime_type": "application/json",
        "handler": summary_handler,
    },
]
