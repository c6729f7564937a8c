# ABOUTME: Core data structures for the library query and integrity engine.
# ABOUTME: Book, ReadingSession, catalog entries, and the BookFilters query description.

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReadingStatus(str, Enum):
    """Reading status derived from a book's reading sessions."""

    WANT_TO_READ = "want-to-read"
    READING = "reading"
    FINISHED = "finished"


class PhysicalFormat(str, Enum):
    """Known physical formats offered when editing a book."""

    PAPERBACK = "Paperback"
    HARDCOVER = "Hardcover"
    MASS_MARKET_PAPERBACK = "Mass Market Paperback"
    TRADE_PAPERBACK = "Trade Paperback"
    LIBRARY_BINDING = "Library Binding"
    SPIRAL_BOUND = "Spiral-bound"
    AUDIO_CD = "Audio CD"
    EBOOK = "Ebook"


class SortKey(str, Enum):
    """Keys accepted by the sort engine."""

    TITLE = "title"
    AUTHOR = "author"
    RATING = "rating"
    SERIES_POSITION = "seriesPosition"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    PAGE_COUNT = "pageCount"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class ReadingSession:
    """One attempt at reading a book.

    Timestamps may be a millisecond number, a date string, a datetime, or a
    store-native timestamp object; only their presence matters for status.
    """

    started_at: Any = None
    finished_at: Any = None


@dataclass
class Book:
    """A book in a user's collection.

    Only id, title and author are required. Everything else may be missing,
    and every engine operation treats a missing field as absent rather than
    as an error. Genres and series are referenced by id.
    """

    id: str
    title: str
    author: str
    isbn: str | None = None
    publisher: str | None = None
    published_date: str | None = None
    physical_format: str | None = None
    page_count: int | None = None
    cover_image_url: str | None = None
    rating: int | None = None
    genres: list[str] = field(default_factory=list)
    series_id: str | None = None
    series_position: float | None = None
    notes: str | None = None
    reads: list[ReadingSession] = field(default_factory=list)
    created_at: Any = None
    updated_at: Any = None
    deleted_at: Any = None

    @property
    def is_deleted(self) -> bool:
        """Whether the book sits in the bin (soft-deleted)."""
        return bool(self.deleted_at)


@dataclass
class Genre:
    id: str
    name: str
    color: str = "#6b7280"


@dataclass
class Series:
    id: str
    name: str


def _as_tuple(values: Any) -> tuple:
    # A lone string is one value, not a sequence of characters
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


@dataclass
class BookFilters:
    """A query over a collection. Unset or empty dimensions do not constrain.

    Set-valued dimensions match if ANY value matches; dimensions combine
    with AND.
    """

    search: str | None = None
    statuses: tuple[ReadingStatus, ...] = ()
    genre_ids: tuple[str, ...] = ()
    series_ids: tuple[str, ...] = ()
    min_rating: int | None = None
    author: str | None = None

    def __post_init__(self) -> None:
        self.statuses = tuple(ReadingStatus(s) for s in _as_tuple(self.statuses))
        self.genre_ids = _as_tuple(self.genre_ids)
        self.series_ids = _as_tuple(self.series_ids)

    def active_dimensions(self) -> list[str]:
        """Names of the dimensions that currently constrain the result."""
        active = []
        if self.search:
            active.append("search")
        if self.statuses:
            active.append("statuses")
        if self.genre_ids:
            active.append("genre_ids")
        if self.series_ids:
            active.append("series_ids")
        if self.min_rating:
            active.append("min_rating")
        if self.author:
            active.append("author")
        return active

    @property
    def is_active(self) -> bool:
        return bool(self.active_dimensions())
