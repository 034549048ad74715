"""
Route definitions for the catalogue pages.

Endpoints:
- GET /search/{letter}?offset=  : books whose title starts with a letter
- GET /book/{book_id}           : one book, as HTML or JSON (``Accept``)
- GET /review?title=&author=    : NYT reviews for a book

Every handler catches failures at its own boundary, logs them and
answers 500 with the error serialised into the body. An unknown book id
is not a failure: it renders the "no content" view, or the not-found
JSON body, with status 200.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.templating import Jinja2Templates

from . import nyt_service, store
from .detail import UNSUPPORTED_TYPE_MESSAGE, book_payload, book_view
from .negotiation import negotiate
from .schemas import ReviewPage


logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

HTML = "text/html"
JSON = "application/json"
DETAIL_TYPES = (HTML, JSON)

router = APIRouter(tags=["catalog"])


def serialize_error(exc: Exception) -> str:
    """Render an exception as a JSON string for the 500 body.

    Driver errors from ``mysql.connector`` also carry ``errno`` and
    ``sqlstate``, which are included when set.
    """
    body = {"type": type(exc).__name__, "message": str(exc)}
    for attr in ("errno", "sqlstate"):
        value = getattr(exc, attr, None)
        if value is not None:
            body[attr] = value
    return json.dumps(body, default=str)


def _server_error(exc: Exception, prefix: str = "") -> HTMLResponse:
    return HTMLResponse(content=f"{prefix}{serialize_error(exc)}", status_code=500)


@router.get("/search/{letter}", response_class=HTMLResponse)
def search_by_letter(
    request: Request,
    letter: str,
    offset: int = Query(default=0, ge=0, description="Rows to skip (page size 10)"),
):
    try:
        page = store.search_books(letter, offset)
        return templates.TemplateResponse(request, "list.html", {"page": page})
    except Exception as exc:
        logger.exception("Listing books for letter %r failed", letter)
        return _server_error(exc)


@router.get("/book/{book_id}")
def book_detail(request: Request, book_id: str):
    try:
        row = store.get_book(book_id)
        media_type = negotiate(request.headers.get("accept"), DETAIL_TYPES)
        vary = {"Vary": "Accept"}
        if media_type == HTML:
            response: Response = templates.TemplateResponse(
                request, "book.html", book_view(row), headers=vary
            )
        elif media_type == JSON:
            response = JSONResponse(content=book_payload(row), headers=vary)
        else:
            response = PlainTextResponse(UNSUPPORTED_TYPE_MESSAGE, headers=vary)
        return response
    except Exception as exc:
        logger.exception("Loading book %r failed", book_id)
        return _server_error(exc, prefix="Error: ")


@router.get("/review", response_class=HTMLResponse)
def book_reviews(
    request: Request,
    title: Optional[str] = Query(default=None, description="Book title"),
    author: Optional[str] = Query(default=None, description="Author(s), comma separated"),
):
    try:
        reviews = ReviewPage(reviews=nyt_service.fetch_reviews(title, author))
        return templates.TemplateResponse(request, "review.html", {"page": reviews})
    except Exception as exc:
        logger.exception("Fetching reviews for %r by %r failed", title, author)
        return _server_error(exc)
