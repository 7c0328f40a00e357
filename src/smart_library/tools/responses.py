"""Tool response payloads.

Tools answer with a text block for display plus, on success, structured data
the client can act on. Failures set ``isError`` instead of raising, so a
rejected operation never takes the server down.
"""

from typing import Any


def error_response(text: str) -> dict[str, Any]:
    return {
        "isError": True,
        "content": [{"type": "text", "text": text}],
    }


def success_response(text: str, data: dict[str, Any]) -> dict[str, Any]:
    return {
        "content": [{"type": "text", "text": text}],
        "data": data,
    }
