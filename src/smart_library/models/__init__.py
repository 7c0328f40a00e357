"""
Smart Library Models.

Pydantic models for the catalog records:

- Book: a catalog item, keyed by ISBN
- User: a registered borrower and the ISBNs they hold
- CirculationReceipt: the outcome of an issue or return
"""

from .book import Book
from .circulation import CirculationAction, CirculationReceipt
from .user import User

__all__ = [
    "Book",
    "CirculationAction",
    "CirculationReceipt",
    "User",
]
