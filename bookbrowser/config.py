"""Configuration for the book browser.

Values are read from the environment (a local ``.env`` file is loaded
first when present). Database settings mirror the variables used by the
deployment: ``DB_HOST``, ``DB_PORT``, ``DB_USER``, ``DB_PASSWORD`` and
``DB_NAME``. The review API key comes from ``API_KEY``; the server
refuses to start without it.
"""

import os
from typing import Optional, Sequence

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000


def _int_or_none(value: Optional[str]) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except ValueError:
        return None


class Config:
    """Application configuration."""

    # Database
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = _int_or_none(os.getenv("DB_PORT")) or 3306
    DB_USER = os.getenv("DB_USER")
    DB_PASSWORD = os.getenv("DB_PASSWORD")
    DB_NAME = os.getenv("DB_NAME", "goodreads")

    # Fixed pool settings
    DB_POOL_NAME = "bookbrowser"
    DB_POOL_SIZE = 4
    DB_TIMEZONE = "+08:00"

    # NYT book reviews
    API_KEY = os.getenv("API_KEY", "")
    REVIEW_API_URL = "https://api.nytimes.com/svc/books/v3/reviews.json"


config = Config()


def resolve_port(argv: Sequence[str]) -> int:
    """Listening port: first CLI argument, then ``PORT``, then 3000."""
    if argv:
        port = _int_or_none(argv[0])
        if port:
            return port
    return _int_or_none(os.getenv("PORT")) or DEFAULT_PORT
