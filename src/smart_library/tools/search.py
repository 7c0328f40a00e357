"""
Search tool for the Smart Library server.

One tool covers the four lookups the catalog supports:

- isbn: exact ISBN through the hash table
- title: exact title through the title tree (first match on the descent)
- prefix: every title starting with the query, alphabetically
- author: exact, case-sensitive author over a full scan
"""

import logging
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from ..library import get_library
from ..models.book import Book
from .responses import error_response, success_response

logger = logging.getLogger(__name__)


class SearchCatalogInput(BaseModel):
    """Input schema for the search_catalog tool."""

    query: str = Field(
        ...,
        description="ISBN, title, title prefix or author to look for",
        min_length=1,
        max_length=100,
        examples=["111", "Dune", "The ", "Frank Herbert"],
    )

    search_by: Literal["isbn", "title", "prefix", "author"] = Field(
        default="title",
        description="Which field the query is matched against",
    )


def _find(query: str, search_by: str) -> list[Book]:
    library = get_library()
    if search_by == "isbn":
        book = library.find_book(query)
        return [book] if book is not None else []
    if search_by == "title":
        book = library.find_book_by_title(query)
        return [book] if book is not None else []
    if search_by == "prefix":
        return library.search_titles(query)
    return library.find_books_by_author(query)


async def search_catalog_handler(arguments: dict[str, Any]) -> dict[str, Any]:
    """Handler for the search_catalog tool."""
    try:
        try:
            params = SearchCatalogInput.model_validate(arguments)
        except ValidationError as e:
            logger.warning("Invalid search parameters: %s", e)
            return error_response(f"Invalid search parameters: {e}")

        logger.debug("Catalog search: %s=%r", params.search_by, params.query)
        books = _find(params.query, params.search_by)

        if books:
            message = f"Found {len(books)} book(s) matching {params.search_by} '{params.query}'"
        else:
            message = f"No books found matching {params.search_by} '{params.query}'"

        return success_response(
            message,
            {
                "books": [book.model_dump() for book in books],
                "count": len(books),
                "search_by": params.search_by,
                "query": params.query,
            },
        )

    except Exception as e:
        logger.exception("Unexpected error in search_catalog tool")
        return error_response(f"An unexpected error occurred: {e!s}")


search_catalog = {
    "name": "search_catalog",
    "description": (
        "Search the catalog by exact ISBN, exact title, title prefix, or exact author name. "
        "Returns matching books with their availability and borrow counts."
    ),
    "inputSchema": SearchCatalogInput.model_json_schema(),
    "handler": search_catalog_handler,
}
