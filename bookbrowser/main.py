# bookbrowser/main.py
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from . import db
from .catalog import catalog_router, templates
from .config import config, resolve_port


logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).resolve().parent / "static"
LETTERS = [chr(c) for c in range(ord("A"), ord("Z") + 1)] + [str(d) for d in range(10)]


def create_app() -> FastAPI:
    app = FastAPI(
        title="Book Browser",
        description=(
            "Browse the goodreads book2018 table by title letter, view "
            "single books as HTML or JSON and look up NYT reviews."
        ),
        version="1.0.0",
    )

    # Landing page
    @app.get("/", response_class=HTMLResponse)
    @app.get("/index.html", response_class=HTMLResponse, include_in_schema=False)
    def index(request: Request):
        return templates.TemplateResponse(request, "index.html", {"letters": LETTERS})

    app.include_router(catalog_router)
    # Static files last, so the routes above take precedence
    app.mount("/", StaticFiles(directory=str(STATIC_DIR)), name="static")
    return app


app = create_app()


def run(argv: Optional[List[str]] = None) -> int:
    """Check the API key and the database, then serve until stopped."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    argv = sys.argv[1:] if argv is None else argv

    if not config.API_KEY:
        logger.error("Failed to start server: No API_KEY in environment variables.")
        return 1

    try:
        db.ping()
    except Exception as exc:
        logger.error("Failed to ping database: %s", exc)
        return 1

    port = resolve_port(argv)
    logger.info("Application started on PORT %s at %s", port, datetime.now())
    uvicorn.run(app, host="0.0.0.0", port=port)
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
