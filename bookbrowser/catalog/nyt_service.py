"""
New York Times book review lookup.

``fetch_reviews()`` queries the NYT Books API reviews endpoint by title
and author and returns the ``results`` array exactly as the API sends
it. Each review carries at least ``book_title``, ``book_author``,
``summary`` and ``url``, which is all the review template uses.

There is no cache, retry or timeout: every request makes
one attempt, and any failure (network error, a body that is not JSON,
a body without ``results``) is raised to the route as a
``ReviewServiceError``. Only the Python standard library is used for
HTTP requests.

The API joins multiple authors with the word "and", so commas in the
author parameter are rewritten before the request is built.
"""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, List, Optional

from ..config import config


logger = logging.getLogger(__name__)

_COMMA = re.compile(r",\s*")


class ReviewServiceError(Exception):
    """The review API could not be reached or answered with garbage."""


def author_query(author: str) -> str:
    """Rewrite ``"Smith, Jones"`` as ``"Smith and Jones"``."""
    return _COMMA.sub(" and ", author)


def build_review_url(title: str, author: str, api_key: str) -> str:
    params = {
        'title': title,
        'author': author,
        'api-key': api_key,
    }
    return f"{config.REVIEW_API_URL}?{urllib.parse.urlencode(params)}"


def _http_get_json(url: str) -> Any:
    request = urllib.request.Request(url, headers={'Accept': 'application/json'})
    try:
        with urllib.request.urlopen(request) as response:
            data = response.read().decode('utf-8', errors='ignore')
    except urllib.error.HTTPError as exc:
        # The API reports bad keys and throttling as JSON error bodies.
        data = exc.read().decode('utf-8', errors='ignore')
        logger.warning("Review API answered %s", exc.code)
    except (urllib.error.URLError, OSError) as exc:
        raise ReviewServiceError(f"Review API unreachable: {exc}") from exc
    try:
        return json.loads(data)
    except ValueError as exc:
        raise ReviewServiceError(f"Review API returned invalid JSON: {exc}") from exc


def fetch_reviews(title: Optional[str], author: Optional[str]) -> List[Dict[str, Any]]:
    """Return the NYT reviews matching ``title`` and ``author``.

    ``author`` is required; calling this with ``None`` fails before any
    request is sent.
    """
    author = author_query(author)
    title = title or ''
    url = build_review_url(title, author, config.API_KEY)
    logger.info("Fetching reviews for title=%r author=%r", title, author)
    data = _http_get_json(url)
    results = data.get('results') if isinstance(data, dict) else None
    if not isinstance(results, list):
        fault = data.get('fault') if isinstance(data, dict) else None
        raise ReviewServiceError(f"Review API response has no results: {fault or data!r}")
    logger.info("Review API returned %d reviews", len(results))
    return results
