# ABOUTME: Duplicate detection for a candidate book against an existing collection.
# ABOUTME: Two tiers: exact ISBN, then normalized title+author over a bounded sample.

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from libris.library.normalizer import clean_isbn, normalize_author, normalize_title
from libris.library.types import Book

logger = logging.getLogger(__name__)

# Maximum number of existing books scanned by the title+author tier. Callers
# pass their most relevant books first; books beyond the cap are not seen.
DUPLICATE_CHECK_LIMIT = 200


class MatchType(str, Enum):
    """Which tier of the duplicate check produced a match."""

    ISBN = "isbn"
    TITLE_AUTHOR = "title-author"


@dataclass
class DuplicateCheckResult:
    """Advisory result of a duplicate check. The caller decides what to do."""

    is_duplicate: bool
    match_type: MatchType | None = None
    existing_book: Book | None = None


def _identity_key(title: str | None, author: str | None) -> tuple[str, str]:
    return normalize_title(title), normalize_author(author)


def find_by_isbn(isbn: str | None, books: Sequence[Book]) -> Book | None:
    """Return the first book whose ISBN equals the given one once cleaned."""
    wanted = clean_isbn(isbn)
    if not wanted:
        return None
    for book in books:
        if book.isbn and clean_isbn(book.isbn) == wanted:
            return book
    return None


def check_duplicate(
    isbn: str | None,
    title: str,
    author: str,
    existing_books: Sequence[Book],
    *,
    limit: int = DUPLICATE_CHECK_LIMIT,
) -> DuplicateCheckResult:
    """Check whether a candidate book already exists in the collection.

    The ISBN tier scans every existing book and wins outright. The
    title+author tier only scans the first `limit` books and requires both
    the normalized title and the normalized author to be equal.

    Args:
        isbn: Candidate ISBN, or None/empty to skip the ISBN tier.
        title: Candidate title.
        author: Candidate author.
        existing_books: The collection to check against, most relevant first.
        limit: Cap on books scanned by the title+author tier.

    Returns:
        A DuplicateCheckResult; is_duplicate is False when nothing matched.
    """
    if isbn:
        match = find_by_isbn(isbn, existing_books)
        if match is not None:
            logger.debug("ISBN %s matches existing book %s", isbn, match.id)
            return DuplicateCheckResult(True, MatchType.ISBN, match)

    wanted = _identity_key(title, author)
    for book in existing_books[: max(limit, 0)]:
        if _identity_key(book.title, book.author) == wanted:
            logger.debug("Title/author %r/%r matches existing book %s", title, author, book.id)
            return DuplicateCheckResult(True, MatchType.TITLE_AUTHOR, book)

    return DuplicateCheckResult(is_duplicate=False)


@dataclass
class DuplicateWarningGate:
    """Tracks "add anyway" overrides for duplicate warnings.

    Once the user acknowledges a warning for a title/author, the same
    candidate does not warn again. Any edit to the title or author cancels
    the acknowledgement, so editing back to the old values warns again.
    """

    _acknowledged: tuple[str, str] | None = None

    def acknowledge(self, title: str, author: str) -> None:
        self._acknowledged = _identity_key(title, author)

    def is_acknowledged(self, title: str, author: str) -> bool:
        return self._acknowledged is not None and self._acknowledged == _identity_key(title, author)

    def should_warn(self, result: DuplicateCheckResult, title: str, author: str) -> bool:
        """Whether a positive match should still be surfaced to the user.

        Call this whenever the candidate changes; a changed title or author
        drops the acknowledgement.
        """
        if self._acknowledged is not None and not self.is_acknowledged(title, author):
            logger.debug("Candidate changed; duplicate warning re-armed")
            self._acknowledged = None
        return result.is_duplicate and self._acknowledged is None

    def reset(self) -> None:
        self._acknowledged = None
