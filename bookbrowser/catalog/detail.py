"""Shapes a ``book2018`` row for the detail page and the JSON endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

from .schemas import BookPayload

NOT_FOUND_PAYLOAD = {
    "404 Not Found": "Sorry! No info found for the requested book id."
}
UNSUPPORTED_TYPE_MESSAGE = (
    "Sorry! The requested data type is not supported by the endpoint."
)


def humanize_list(value: Optional[str]) -> Optional[str]:
    """Turn ``"a|b|c"`` into ``"a, b, c"``."""
    if value is None:
        return None
    return value.replace("|", ", ")


def book_view(row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Template context for ``book.html``."""
    if not row:
        return {"has_content": False, "book": None, "authors": None, "genres": None}
    return {
        "has_content": True,
        "book": row,
        "authors": humanize_list(row.get("authors")),
        "genres": humanize_list(row.get("genres")),
    }


def book_payload(row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """JSON body for a book; a missing row gets the not-found body."""
    if not row:
        return dict(NOT_FOUND_PAYLOAD)
    return BookPayload.from_row(row).model_dump(by_alias=True)
