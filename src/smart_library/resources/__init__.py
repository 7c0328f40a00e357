"""Smart Library Resources Package

Resources are the read-only views of the catalog; anything that changes
state is a tool. Each resource is a dictionary with a URI (or URI template),
name, description, MIME type and async handler.
"""

from .books import book_resources
from .reports import report_resources
from .users import user_resources

all_resources = book_resources + user_resources + report_resources

__all__ = [
    "all_resources",
    "book_resources",
    "report_resources",
    "user_resources",
]
