"""
Data access for the catalogue.

All queries run against the ``book2018`` table through the shared
connection pool in ``bookbrowser.db``. Parameters are always bound
with ``%s`` placeholders; titles are matched with ``LIKE 'X%'`` so the
letter comparison follows the table's collation. Driver errors are not
caught here: the routes turn them into 500 responses.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional

from ..db import connection
from .schemas import BookPage, BookSummary


logger = logging.getLogger(__name__)

PAGE_SIZE = 10

SQL_TOTAL_BOOKS_BY_LETTER = (
    "select count(*) as total from book2018 where title like %s"
)
SQL_GET_BOOKS_BY_LETTER = (
    "select book_id, title from book2018 where title like %s "
    "order by title limit %s offset %s"
)
SQL_GET_BOOK_BY_ID = "select * from book2018 where book_id = %s"


def _prefix(letter: str) -> str:
    return f"{letter}%"


def max_page(total: int) -> int:
    """Number of pages needed to show ``total`` books.

    Computed as ``floor(total / 10 - 0.01) + 1``, which matches
    ``ceil(total / 10)`` for any positive total.
    """
    return math.floor(total / PAGE_SIZE - 0.01) + 1


def count_books_by_letter(conn, letter: str) -> int:
    cursor = conn.cursor(dictionary=True)
    try:
        cursor.execute(SQL_TOTAL_BOOKS_BY_LETTER, (_prefix(letter),))
        row = cursor.fetchone()
    finally:
        cursor.close()
    return int(row["total"]) if row else 0


def list_books_by_letter(
    conn, letter: str, limit: int = PAGE_SIZE, offset: int = 0
) -> List[Dict[str, Any]]:
    cursor = conn.cursor(dictionary=True)
    try:
        cursor.execute(SQL_GET_BOOKS_BY_LETTER, (_prefix(letter), limit, offset))
        return cursor.fetchall()
    finally:
        cursor.close()


def get_book_row(conn, book_id: str) -> Optional[Dict[str, Any]]:
    cursor = conn.cursor(dictionary=True)
    try:
        cursor.execute(SQL_GET_BOOK_BY_ID, (book_id,))
        rows = cursor.fetchall()
    finally:
        cursor.close()
    return rows[0] if rows else None


def search_books(letter: str, offset: int = 0) -> BookPage:
    """Return one page of books whose title starts with ``letter``.

    The total is counted first; when nothing matches, the page query is
    skipped. Offsets past the last page are not rejected, they simply
    produce an empty page.
    """
    with connection() as conn:
        total = count_books_by_letter(conn, letter)
        rows: List[Dict[str, Any]] = []
        pages = 0
        if total > 0:
            pages = max_page(total)
            rows = list_books_by_letter(conn, letter, PAGE_SIZE, offset)
    logger.info(
        "Letter %r: %d books, %d pages, offset %d returned %d rows",
        letter, total, pages, offset, len(rows),
    )
    return BookPage(
        letter=letter.upper(),
        total=total,
        offset=offset,
        page_size=PAGE_SIZE,
        max_page=pages,
        books=[BookSummary(book_id=r["book_id"], title=r["title"]) for r in rows],
    )


def get_book(book_id: str) -> Optional[Dict[str, Any]]:
    """Fetch a full ``book2018`` row by id, or ``None`` when absent."""
    with connection() as conn:
        return get_book_row(conn, book_id)
