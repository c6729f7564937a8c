# ABOUTME: Completeness scoring and health reporting for a book collection.
# ABOUTME: Weighted per-book scores, a clamped library aggregate, and per-field issue buckets.

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from libris.library.filters import exclude_deleted
from libris.library.types import Book


@dataclass(frozen=True)
class HealthField:
    """A tracked book field and its weight in the completeness score."""

    weight: int
    label: str


# Tracked fields, in remediation display order. ISBN has no weight: it does
# not affect the score, only whether a book is fixable by catalog re-lookup.
HEALTH_FIELDS: dict[str, HealthField] = {
    "cover_image_url": HealthField(2, "Cover"),
    "genres": HealthField(2, "Genres"),
    "page_count": HealthField(1, "Pages"),
    "physical_format": HealthField(1, "Format"),
    "publisher": HealthField(1, "Publisher"),
    "published_date": HealthField(1, "Date"),
    "isbn": HealthField(0, "ISBN"),
}

TOTAL_WEIGHT = sum(f.weight for f in HEALTH_FIELDS.values())


class IssueType(str, Enum):
    MISSING_COVER = "missing_cover"
    MISSING_GENRES = "missing_genres"
    MISSING_PAGE_COUNT = "missing_page_count"
    MISSING_FORMAT = "missing_format"
    MISSING_PUBLISHER = "missing_publisher"
    MISSING_PUBLISHED_DATE = "missing_published_date"
    MISSING_ISBN = "missing_isbn"


ISSUE_FIELDS: dict[IssueType, str] = {
    IssueType.MISSING_COVER: "cover_image_url",
    IssueType.MISSING_GENRES: "genres",
    IssueType.MISSING_PAGE_COUNT: "page_count",
    IssueType.MISSING_FORMAT: "physical_format",
    IssueType.MISSING_PUBLISHER: "publisher",
    IssueType.MISSING_PUBLISHED_DATE: "published_date",
    IssueType.MISSING_ISBN: "isbn",
}


@dataclass(frozen=True)
class CompletenessRating:
    label: str
    colour: str


@dataclass
class HealthReport:
    """Derived health summary of a collection. Recomputed, never stored."""

    total_books: int = 0
    completeness_score: int = 100
    total_issues: int = 0
    fixable_books: int = 0
    issues: dict[IssueType, list[Book]] = field(
        default_factory=lambda: {issue: [] for issue in IssueType}
    )


@dataclass
class BookIssues:
    """All missing fields of one book, for a remediation list."""

    book: Book
    missing: list[str] = field(default_factory=list)


def round_half_up(value: float) -> int:
    """Round .5 upwards (12.5 -> 13), unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


def has_field_value(book: Book, field_name: str) -> bool:
    """Check whether a tracked field is present on a book.

    Strings and numbers must be truthy; genres must be a non-empty list.
    """
    value = getattr(book, field_name, None)
    if field_name == "genres":
        return isinstance(value, (list, tuple)) and len(value) > 0
    return bool(value)


def missing_fields(book: Book) -> list[str]:
    """Tracked fields absent from a book, ISBN included, in display order."""
    return [name for name in HEALTH_FIELDS if not has_field_value(book, name)]


def book_completeness(book: Book) -> int:
    """Weighted completeness of one book, 0-100."""
    present = sum(
        config.weight
        for name, config in HEALTH_FIELDS.items()
        if config.weight > 0 and has_field_value(book, name)
    )
    return round_half_up(100 * present / TOTAL_WEIGHT)


def library_completeness(books: Iterable[Book] | None) -> int:
    """Mean completeness of the non-deleted books in a collection, 0-100.

    A collection with no active books is 100. A collection is only reported
    as 100 when every book is 100; otherwise a mean that rounds to 100 is
    shown as 99.
    """
    active = exclude_deleted(books or [])
    if not active:
        return 100

    scores = [book_completeness(book) for book in active]
    score = round_half_up(sum(scores) / len(scores))

    if score == 100 and any(s < 100 for s in scores):
        return 99
    return score


def analyze_library(books: Iterable[Book]) -> HealthReport:
    """Analyze a collection for missing data.

    Soft-deleted books are ignored. Every remaining book is placed in the
    bucket of each field it is missing. total_issues counts only weighted
    fields; fixable_books counts books with an ISBN that miss at least one
    weighted field, since a catalog re-lookup could fill them in.
    """
    active = exclude_deleted(books)
    report = HealthReport(total_books=len(active))

    for book in active:
        for issue, field_name in ISSUE_FIELDS.items():
            if not has_field_value(book, field_name):
                report.issues[issue].append(book)

    report.completeness_score = library_completeness(active)
    report.total_issues = sum(
        len(report.issues[issue])
        for issue, field_name in ISSUE_FIELDS.items()
        if HEALTH_FIELDS[field_name].weight > 0
    )
    report.fixable_books = sum(
        1
        for book in active
        if has_field_value(book, "isbn")
        and any(HEALTH_FIELDS[name].weight > 0 for name in missing_fields(book))
    )
    return report


def completeness_rating(score: int) -> CompletenessRating:
    """Map a completeness score to a display band."""
    if score >= 90:
        return CompletenessRating("Excellent", "green")
    if score >= 70:
        return CompletenessRating("Good", "green")
    if score >= 50:
        return CompletenessRating("Fair", "amber")
    return CompletenessRating("Needs Attention", "red")


def books_with_issues(report: HealthReport) -> list[BookIssues]:
    """Group a report's issues per book, books with the most issues first.

    Missing-field labels are listed in field order. Books with equal issue
    counts keep the order in which they were first seen.
    """
    grouped: dict[str, BookIssues] = {}
    for issue, field_name in ISSUE_FIELDS.items():
        for book in report.issues.get(issue, []):
            entry = grouped.setdefault(book.id, BookIssues(book=book))
            entry.missing.append(HEALTH_FIELDS[field_name].label)
    return sorted(grouped.values(), key=lambda entry: len(entry.missing), reverse=True)
