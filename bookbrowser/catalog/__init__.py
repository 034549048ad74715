"""
Catalog package for the book browser.

This package holds the pages that browse the ``book2018`` table: the
letter listing, the single-book view (HTML or JSON) and the NYT review
lookup. ``store`` talks to MySQL, ``detail`` and ``negotiation`` shape
the book responses, and ``nyt_service`` wraps the external review API.
"""

from .router import router as catalog_router, templates  # noqa: F401
