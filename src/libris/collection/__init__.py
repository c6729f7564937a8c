# ABOUTME: Public API for reading collection snapshots handed to the engine.
# ABOUTME: Exports snapshot loading, record mapping, and the snapshot error type.

from libris.collection.mapping import book_from_dict, book_to_dict
from libris.collection.snapshot import (
    DEFAULT_COLLECTION_PATH,
    LibrarySnapshot,
    SnapshotError,
    load_snapshot,
)

__all__ = [
    "DEFAULT_COLLECTION_PATH",
    "LibrarySnapshot",
    "SnapshotError",
    "book_from_dict",
    "book_to_dict",
    "load_snapshot",
]
