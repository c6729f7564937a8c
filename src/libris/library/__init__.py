# ABOUTME: Library query and integrity engine: filtering, facets, sorting, duplicates, health.
# ABOUTME: Pure functions over in-memory book snapshots; inputs are never mutated.

from libris.library.duplicates import (
    DUPLICATE_CHECK_LIMIT,
    DuplicateCheckResult,
    DuplicateWarningGate,
    MatchType,
    check_duplicate,
)
from libris.library.facets import BookCounts, FacetOption, collect_authors, count_facets
from libris.library.filters import exclude_deleted, filter_books
from libris.library.health import HealthReport, analyze_library, book_completeness
from libris.library.sorting import UnknownSortKeyError, sort_books, to_millis
from libris.library.status import derive_status
from libris.library.types import (
    Book,
    BookFilters,
    Genre,
    ReadingSession,
    ReadingStatus,
    Series,
    SortDirection,
    SortKey,
)

__all__ = [
    "DUPLICATE_CHECK_LIMIT",
    "Book",
    "BookCounts",
    "BookFilters",
    "DuplicateCheckResult",
    "DuplicateWarningGate",
    "FacetOption",
    "Genre",
    "HealthReport",
    "MatchType",
    "ReadingSession",
    "ReadingStatus",
    "Series",
    "SortDirection",
    "SortKey",
    "UnknownSortKeyError",
    "analyze_library",
    "book_completeness",
    "check_duplicate",
    "collect_authors",
    "count_facets",
    "derive_status",
    "exclude_deleted",
    "filter_books",
    "sort_books",
    "to_millis",
]
