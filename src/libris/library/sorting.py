# ABOUTME: Sort engine ordering books by title, author, rating, series position, or timestamps.
# ABOUTME: Missing ratings/positions always sort last; timestamps are normalized to milliseconds.

import logging
import math
from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone
from typing import Any

from libris.library.normalizer import normalize_text
from libris.library.types import Book, SortDirection, SortKey

logger = logging.getLogger(__name__)


class UnknownSortKeyError(ValueError):
    """Raised when the sort engine is asked for a key it does not know."""


def to_millis(value: Any) -> int:
    """Normalize a timestamp to integer milliseconds since the epoch.

    Accepts a plain number (already milliseconds), an object exposing
    to_millis() or toMillis() (store-native timestamps), a datetime or
    date, or an ISO-8601 date string. Missing or unparseable values are 0,
    which sorts them as the oldest.
    """
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        logger.debug("Non-finite timestamp %r treated as 0", value)
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    for method_name in ("to_millis", "toMillis"):
        method = getattr(value, method_name, None)
        if callable(method):
            return int(method())
    if isinstance(value, datetime):
        return _datetime_millis(value)
    if isinstance(value, date):
        return _datetime_millis(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.debug("Unparseable timestamp %r treated as 0", value)
            return 0
        return _datetime_millis(parsed)
    logger.debug("Unsupported timestamp type %s treated as 0", type(value).__name__)
    return 0


def _datetime_millis(value: datetime) -> int:
    # Naive datetimes are taken as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def _collation_key(text: str | None) -> tuple[str, str]:
    """Accent- and case-insensitive ordering with a deterministic tie-break."""
    return normalize_text(text), text or ""


def _present(value: Any) -> bool:
    # Getters map "not rated" (0) to None; a series position of 0 is present
    return value is not None


# Keys whose missing values always sort after present values, in both directions.
_MISSING_LAST_KEYS: dict[SortKey, Callable[[Book], Any]] = {
    SortKey.RATING: lambda book: book.rating or None,
    SortKey.SERIES_POSITION: lambda book: book.series_position,
    SortKey.PAGE_COUNT: lambda book: book.page_count or None,
}

_PLAIN_KEYS: dict[SortKey, Callable[[Book], Any]] = {
    SortKey.TITLE: lambda book: _collation_key(book.title),
    SortKey.AUTHOR: lambda book: _collation_key(book.author),
    SortKey.CREATED_AT: lambda book: to_millis(book.created_at),
    SortKey.UPDATED_AT: lambda book: to_millis(book.updated_at),
}


def _coerce_key(key: SortKey | str) -> SortKey:
    try:
        return SortKey(key)
    except ValueError as exc:
        raise UnknownSortKeyError(f"Unknown sort key: {key!r}") from exc


def _coerce_direction(direction: SortDirection | str) -> SortDirection:
    try:
        return SortDirection(direction)
    except ValueError as exc:
        raise ValueError(f"Unknown sort direction: {direction!r}") from exc


def sort_books(
    books: Iterable[Book],
    key: SortKey | str,
    direction: SortDirection | str = SortDirection.ASC,
) -> list[Book]:
    """Return a new list of books ordered by key and direction.

    The input is never sorted in place. Ties keep their input order. For
    rating, series position and page count, books missing the value come
    after every book that has it, whichever the direction.

    Raises:
        UnknownSortKeyError: If key is not a SortKey.
        ValueError: If direction is not "asc" or "desc".
    """
    sort_key = _coerce_key(key)
    descending = _coerce_direction(direction) is SortDirection.DESC
    books = list(books)

    if sort_key in _MISSING_LAST_KEYS:
        getter = _MISSING_LAST_KEYS[sort_key]
        present = [book for book in books if _present(getter(book))]
        missing = [book for book in books if not _present(getter(book))]
        return sorted(present, key=getter, reverse=descending) + missing

    return sorted(books, key=_PLAIN_KEYS[sort_key], reverse=descending)


def parse_sort_value(value: str) -> tuple[SortKey, SortDirection]:
    """Split a combined "key-direction" value such as "createdAt-desc".

    Raises:
        UnknownSortKeyError: If the key part is unknown.
        ValueError: If the value has no direction or an unknown one.
    """
    key, sep, direction = value.rpartition("-")
    if not sep:
        raise ValueError(f"Sort value must look like 'key-direction', got {value!r}")
    return _coerce_key(key), _coerce_direction(direction)
