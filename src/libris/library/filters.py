# ABOUTME: Filter engine applying multi-dimension BookFilters to a book collection.
# ABOUTME: OR within a dimension, AND across dimensions; input order is preserved.

from collections.abc import Iterable

from libris.library.status import derive_status
from libris.library.types import Book, BookFilters


def exclude_deleted(books: Iterable[Book]) -> list[Book]:
    """Drop soft-deleted books. Callers do this before querying."""
    return [book for book in books if not book.is_deleted]


def matches_search(book: Book, search: str) -> bool:
    """Case-insensitive substring match against title or author."""
    needle = search.lower()
    return needle in (book.title or "").lower() or needle in (book.author or "").lower()


def matches_author(book: Book, author: str) -> bool:
    """Case-insensitive exact author match (not a substring)."""
    return (book.author or "").lower() == author.lower()


def meets_rating_floor(book: Book, floor: int) -> bool:
    """Unrated books never meet a rating floor."""
    return bool(book.rating) and book.rating >= floor


def book_matches(book: Book, filters: BookFilters) -> bool:
    """Check whether a single book passes every active filter dimension."""
    if filters.search and not matches_search(book, filters.search):
        return False

    if filters.statuses and derive_status(book) not in filters.statuses:
        return False

    if filters.genre_ids:
        book_genres = book.genres or []
        if not any(genre_id in book_genres for genre_id in filters.genre_ids):
            return False

    if filters.series_ids and (not book.series_id or book.series_id not in filters.series_ids):
        return False

    if filters.min_rating and not meets_rating_floor(book, filters.min_rating):
        return False

    if filters.author and not matches_author(book, filters.author):
        return False

    return True


def filter_books(books: Iterable[Book], filters: BookFilters) -> list[Book]:
    """Return the books that pass all active filters, in input order.

    Returns a new list; neither the input nor the books are modified.
    """
    return [book for book in books if book_matches(book, filters)]
