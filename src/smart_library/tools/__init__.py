"""
Tools for the Smart Library server.

Tools are the operations with side effects (plus the catalog search, which
takes a query). Each tool is a dictionary with its name, description, input
schema and async handler; the server registers everything in ``all_tools``.
"""

from .catalog import add_book, add_user, remove_book, remove_user
from .circulation import issue_book, return_book
from .search import search_catalog

all_tools = [
    add_book,
    remove_book,
    add_user,
    remove_user,
    issue_book,
    return_book,
    search_catalog,
]

__all__ = [
    "add_book",
    "add_user",
    "all_tools",
    "issue_book",
    "remove_book",
    "remove_user",
    "return_book",
    "search_catalog",
]
