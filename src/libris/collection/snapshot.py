# ABOUTME: Reads a JSON snapshot of a book collection and its genre/series catalogs.
# ABOUTME: The snapshot is the hand-off point between the backing store and the engine.

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from libris.collection.mapping import genre_from_dict, records_to_books, series_from_dict
from libris.library.filters import exclude_deleted
from libris.library.types import Book, Genre, Series

logger = logging.getLogger(__name__)

DEFAULT_COLLECTION_PATH = Path.home() / ".libris" / "collection.json"


class SnapshotError(Exception):
    """Raised when a collection snapshot cannot be read or parsed."""


@dataclass
class LibrarySnapshot:
    """An in-memory copy of a collection, as fetched from the store."""

    books: list[Book] = field(default_factory=list)
    genres: list[Genre] = field(default_factory=list)
    series: list[Series] = field(default_factory=list)

    @property
    def active_books(self) -> list[Book]:
        """Books that are not in the bin."""
        return exclude_deleted(self.books)

    def get_book(self, book_id: str) -> Book | None:
        for book in self.books:
            if book.id == book_id:
                return book
        return None


def _catalog_entries(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    entries = data.get(key) or []
    if not isinstance(entries, list):
        raise SnapshotError(f"'{key}' must be a list")
    valid = [e for e in entries if isinstance(e, dict) and e.get("id")]
    if len(valid) != len(entries):
        logger.warning("Skipped %d %s entries without an id", len(entries) - len(valid), key)
    return valid


def parse_snapshot(data: Any) -> LibrarySnapshot:
    """Build a LibrarySnapshot from decoded JSON.

    Accepts either {"books": [...], "genres": [...], "series": [...]} or a
    bare list of book records.

    Raises:
        SnapshotError: If the document has the wrong shape.
    """
    if isinstance(data, list):
        return LibrarySnapshot(books=records_to_books(data))
    if not isinstance(data, dict):
        raise SnapshotError("Snapshot must be a JSON object or a list of books")

    books = data.get("books") or []
    if not isinstance(books, list):
        raise SnapshotError("'books' must be a list")

    return LibrarySnapshot(
        books=records_to_books(books),
        genres=[genre_from_dict(g) for g in _catalog_entries(data, "genres")],
        series=[series_from_dict(s) for s in _catalog_entries(data, "series")],
    )


def load_snapshot(path: Path | None = None) -> LibrarySnapshot:
    """Load a collection snapshot from a JSON file.

    Args:
        path: Path to the snapshot. Defaults to ~/.libris/collection.json.

    Returns:
        The parsed LibrarySnapshot.

    Raises:
        SnapshotError: If the file cannot be read or is not a valid snapshot.
    """
    snapshot_path = path or DEFAULT_COLLECTION_PATH
    try:
        text = snapshot_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotError(f"Cannot read collection {snapshot_path}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Invalid JSON in {snapshot_path}: {exc}") from exc

    snapshot = parse_snapshot(data)
    logger.debug(
        "Loaded %d book(s), %d genre(s), %d series from %s",
        len(snapshot.books), len(snapshot.genres), len(snapshot.series), snapshot_path,
    )
    return snapshot
