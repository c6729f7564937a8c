# ABOUTME: Converts between Book dataclasses and snapshot record dictionaries.
# ABOUTME: Snapshot records use camelCase keys; missing, null, or mistyped values become absent.

import logging
import math
from typing import Any

from libris.library.types import Book, Genre, ReadingSession, Series

logger = logging.getLogger(__name__)

# Book attribute -> snapshot key, for text fields.
_TEXT_FIELDS: dict[str, str] = {
    "isbn": "isbn",
    "publisher": "publisher",
    "published_date": "publishedDate",
    "physical_format": "physicalFormat",
    "cover_image_url": "coverImageUrl",
    "series_id": "seriesId",
    "notes": "notes",
}

# Book attribute -> (snapshot key, whether the value must be a whole number).
_NUMBER_FIELDS: dict[str, tuple[str, bool]] = {
    "page_count": ("pageCount", True),
    "rating": ("rating", True),
    "series_position": ("seriesPosition", False),
}

# Timestamps are kept in whatever form the store wrote them; the sort engine normalizes them.
_TIMESTAMP_FIELDS: dict[str, str] = {
    "created_at": "createdAt",
    "updated_at": "updatedAt",
    "deleted_at": "deletedAt",
}

_SCALAR_FIELDS: dict[str, str] = {
    **_TEXT_FIELDS,
    **{attr: key for attr, (key, _) in _NUMBER_FIELDS.items()},
    **_TIMESTAMP_FIELDS,
}


def _text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _number(value: Any, key: str, book_id: str, whole: bool) -> int | float | None:
    """Coerce a numeric snapshot value, or return None with a warning when it is not one.

    Numeric strings such as "5" are accepted. Whole values come back as int.
    """
    if value is None or value == "":
        return None
    number: float | None = None
    if not isinstance(value, bool):
        try:
            number = float(value)
        except (TypeError, ValueError):
            number = None
    if number is None or not math.isfinite(number) or (whole and not number.is_integer()):
        logger.warning("Ignoring %s=%r on book %s: not a valid number", key, value, book_id or "?")
        return None
    if number.is_integer():
        return int(number)
    return number


def session_from_dict(data: Any) -> ReadingSession:
    """Build a ReadingSession; anything that is not a mapping is an empty session."""
    if not isinstance(data, dict):
        return ReadingSession()
    return ReadingSession(started_at=data.get("startedAt"), finished_at=data.get("finishedAt"))


def book_from_dict(data: dict[str, Any]) -> Book:
    """Convert a snapshot record to a Book.

    Unknown keys are ignored. A record without an id gets an empty one;
    title and author default to empty strings rather than failing. Text
    fields holding another type are converted with str(); numeric fields
    that cannot be read as numbers are treated as absent.
    """
    book_id = _text(data.get("id")) or ""
    genres = data.get("genres") or []
    reads = data.get("reads") or []
    fields: dict[str, Any] = {attr: _text(data.get(key)) for attr, key in _TEXT_FIELDS.items()}
    for attr, (key, whole) in _NUMBER_FIELDS.items():
        fields[attr] = _number(data.get(key), key, book_id, whole)
    for attr, key in _TIMESTAMP_FIELDS.items():
        fields[attr] = data.get(key)
    return Book(
        id=book_id,
        title=_text(data.get("title")) or "",
        author=_text(data.get("author")) or "",
        genres=[str(g) for g in genres] if isinstance(genres, list) else [],
        reads=[session_from_dict(r) for r in reads] if isinstance(reads, list) else [],
        **fields,
    )


def book_to_dict(book: Book) -> dict[str, Any]:
    """Convert a Book to a snapshot record, omitting absent optional fields."""
    record: dict[str, Any] = {
        "id": book.id,
        "title": book.title,
        "author": book.author,
        "genres": list(book.genres),
        "reads": [
            {"startedAt": session.started_at, "finishedAt": session.finished_at}
            for session in book.reads
        ],
    }
    for attr, key in _SCALAR_FIELDS.items():
        value = getattr(book, attr)
        if value is not None:
            record[key] = value
    return record


def genre_from_dict(data: dict[str, Any]) -> Genre:
    color = data.get("color")
    if color:
        return Genre(id=str(data["id"]), name=_text(data.get("name")) or "", color=str(color))
    return Genre(id=str(data["id"]), name=_text(data.get("name")) or "")


def series_from_dict(data: dict[str, Any]) -> Series:
    return Series(id=str(data["id"]), name=_text(data.get("name")) or "")


def records_to_books(records: list[Any]) -> list[Book]:
    """Map a list of snapshot records, skipping entries that are not objects."""
    books: list[Book] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping book record %d: expected an object, got %s",
                           index, type(record).__name__)
            continue
        books.append(book_from_dict(record))
    return books
