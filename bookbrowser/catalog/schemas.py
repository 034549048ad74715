"""
Pydantic schema definitions for the catalog module.

``BookSummary`` is the narrow ``{book_id, title}`` pair shown in the
letter listing. ``BookPage`` bundles one page of summaries with the
pagination metadata the list template needs. ``BookPayload`` is the
JSON representation of a single book: the database column names are
renamed to the public field names (``bookId``, ``summary``,
``ratingCount``, ``genre``) through aliases, so always dump it with
``by_alias=True``.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BookSummary(BaseModel):
    """A single row of the letter listing."""

    book_id: Union[int, str]
    title: Optional[str] = None


class BookPage(BaseModel):
    """One page of books whose title starts with ``letter``."""

    letter: str
    total: int = 0
    offset: int = 0
    page_size: int = 10
    # Number of pages for ``total``; informational only, the incoming
    # offset is never clamped against it.
    max_page: int = 0
    books: List[BookSummary] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return self.total > 0

    @property
    def page(self) -> int:
        return self.offset // self.page_size + 1

    @property
    def prev_offset(self) -> Optional[int]:
        if self.offset <= 0:
            return None
        return max(0, self.offset - self.page_size)

    @property
    def next_offset(self) -> Optional[int]:
        nxt = self.offset + self.page_size
        return nxt if nxt < self.total else None


class BookPayload(BaseModel):
    """JSON view of a book row."""

    model_config = ConfigDict(populate_by_name=True)

    book_id: Union[int, str] = Field(alias="bookId")
    title: Optional[str] = None
    # Authors and genres stay in their raw pipe-delimited form here.
    authors: Optional[str] = None
    description: Optional[str] = Field(default=None, alias="summary")
    pages: Optional[int] = None
    rating: Optional[float] = None
    rating_count: Optional[int] = Field(default=None, alias="ratingCount")
    genres: Optional[str] = Field(default=None, alias="genre")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "BookPayload":
        return cls(
            book_id=row["book_id"],
            title=row.get("title"),
            authors=row.get("authors"),
            description=row.get("description"),
            pages=row.get("pages"),
            rating=row.get("rating"),
            rating_count=row.get("rating_count"),
            genres=row.get("genres"),
        )


class ReviewPage(BaseModel):
    """Reviews returned by the NYT API, passed through untouched."""

    reviews: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def has_content(self) -> bool:
        return len(self.reviews) > 0
