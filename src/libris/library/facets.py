# ABOUTME: Faceted counts over a book collection for each filterable dimension.
# ABOUTME: Drives "(N)" counts next to filter options and disables empty unselected options.

from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from libris.library.status import STATUS_LABELS, STATUS_OPTIONS, derive_status
from libris.library.types import Book, BookFilters, Genre, Series

RATING_FLOORS: tuple[int, ...] = (5, 4, 3, 2, 1)


@dataclass
class BookCounts:
    """Per-dimension tallies over whatever population was passed in.

    Rating counts are cumulative: ratings[r] is the number of books rated
    r or higher.
    """

    statuses: dict[str, int] = field(default_factory=dict)
    genres: dict[str, int] = field(default_factory=dict)
    series: dict[str, int] = field(default_factory=dict)
    ratings: dict[int, int] = field(default_factory=dict)
    authors: dict[str, int] = field(default_factory=dict)
    total: int = 0


@dataclass
class FacetOption:
    """A single filter option with its count and selection state."""

    dimension: str
    value: str | int
    label: str
    count: int
    selected: bool = False

    @property
    def disabled(self) -> bool:
        """Empty options render disabled unless the user already selected them."""
        return self.count == 0 and not self.selected


def collect_authors(books: Iterable[Book]) -> list[str]:
    """Distinct author names, case-insensitively deduplicated, sorted.

    The first spelling seen for an author is the one kept.
    """
    seen: dict[str, str] = {}
    for book in books:
        if book.author and book.author.lower() not in seen:
            seen[book.author.lower()] = book.author
    return sorted(seen.values(), key=str.lower)


def _tally_catalog(tallies: Counter, catalog_ids: Sequence[str] | None) -> dict[str, int]:
    if catalog_ids is None:
        return dict(tallies)
    return {catalog_id: tallies.get(catalog_id, 0) for catalog_id in catalog_ids}


def count_facets(
    books: Iterable[Book],
    genres: Sequence[Genre] | None = None,
    series: Sequence[Series] | None = None,
    authors: Sequence[str] | None = None,
) -> BookCounts:
    """Count books per filter value in every dimension.

    The counter does not filter; pass the currently filtered view for
    faceted-search counts or the whole collection for global counts. When a
    catalog (genres, series, authors) is given, every catalog entry gets a
    count, zero included. Without one, only values seen on books appear.

    Args:
        books: The population to tally.
        genres: Genre catalog, or None to tally genre ids found on books.
        series: Series catalog, or None to tally series ids found on books.
        authors: Author names, or None to tally authors found on books.

    Returns:
        A BookCounts with status, genre, series, cumulative rating,
        author, and total counts.
    """
    status_tally: Counter = Counter()
    genre_tally: Counter = Counter()
    series_tally: Counter = Counter()
    rating_tally: Counter = Counter()
    author_tally: Counter = Counter()
    author_spelling: dict[str, str] = {}
    total = 0

    for book in books:
        total += 1
        status_tally[derive_status(book)] += 1
        # A genre listed twice on one book still counts the book once
        for genre_id in set(book.genres or []):
            genre_tally[genre_id] += 1
        if book.series_id:
            series_tally[book.series_id] += 1
        if book.rating:
            rating_tally[book.rating] += 1
        if book.author:
            key = book.author.lower()
            author_tally[key] += 1
            author_spelling.setdefault(key, book.author)

    counts = BookCounts(total=total)
    counts.statuses = {status.value: status_tally.get(status, 0) for status in STATUS_OPTIONS}
    counts.genres = _tally_catalog(
        genre_tally, [g.id for g in genres] if genres is not None else None
    )
    counts.series = _tally_catalog(
        series_tally, [s.id for s in series] if series is not None else None
    )
    counts.ratings = {
        floor: sum(n for rating, n in rating_tally.items() if rating >= floor)
        for floor in RATING_FLOORS
    }
    if authors is None:
        counts.authors = {author_spelling[key]: n for key, n in author_tally.items()}
    else:
        counts.authors = {name: author_tally.get(name.lower(), 0) for name in authors}
    return counts


def _rating_label(floor: int) -> str:
    return "5 Stars" if floor == 5 else f"{floor}+ Stars"


def facet_options(
    counts: BookCounts,
    filters: BookFilters | None = None,
    genres: Sequence[Genre] | None = None,
    series: Sequence[Series] | None = None,
    authors: Sequence[str] | None = None,
) -> dict[str, list[FacetOption]]:
    """Build labelled filter options per dimension from faceted counts.

    Selected values are always listed, even when no book carries them any
    more, so the user can still deselect them.
    """
    filters = filters or BookFilters()
    options: dict[str, list[FacetOption]] = {}

    options["statuses"] = [
        FacetOption(
            dimension="statuses",
            value=status.value,
            label=STATUS_LABELS[status],
            count=counts.statuses.get(status.value, 0),
            selected=status in filters.statuses,
        )
        for status in STATUS_OPTIONS
    ]

    options["ratings"] = [
        FacetOption(
            dimension="ratings",
            value=floor,
            label=_rating_label(floor),
            count=counts.ratings.get(floor, 0),
            selected=filters.min_rating == floor,
        )
        for floor in RATING_FLOORS
    ]

    genre_names = {g.id: g.name for g in genres or []}
    options["genres"] = _id_options(
        "genres", counts.genres, genre_names, filters.genre_ids, ordered=genres is not None
    )

    series_names = {s.id: s.name for s in series or []}
    options["series"] = _id_options(
        "series", counts.series, series_names, filters.series_ids, ordered=series is not None
    )

    author_names = list(authors) if authors is not None else sorted(counts.authors, key=str.lower)
    selected_author = (filters.author or "").lower()
    author_options = [
        FacetOption(
            dimension="authors",
            value=name,
            label=name,
            count=counts.authors.get(name, 0),
            selected=bool(selected_author) and name.lower() == selected_author,
        )
        for name in author_names
    ]
    if filters.author and not any(opt.selected for opt in author_options):
        author_options.append(
            FacetOption("authors", filters.author, filters.author, 0, selected=True)
        )
    options["authors"] = author_options

    return options


def _id_options(
    dimension: str,
    tallies: dict[str, int],
    names: dict[str, str],
    selected_ids: Sequence[str],
    *,
    ordered: bool,
) -> list[FacetOption]:
    """Options for an id-referenced dimension (genres, series).

    Catalog order is kept when a catalog was given, otherwise options are
    sorted by label. Selected ids missing from the tallies are appended.
    """
    ids = list(tallies) if ordered else sorted(tallies, key=lambda i: names.get(i, i).lower())
    result = [
        FacetOption(
            dimension=dimension,
            value=item_id,
            label=names.get(item_id, item_id),
            count=tallies.get(item_id, 0),
            selected=item_id in selected_ids,
        )
        for item_id in ids
    ]
    for item_id in selected_ids:
        if item_id not in tallies:
            result.append(
                FacetOption(dimension, item_id, names.get(item_id, item_id), 0, selected=True)
            )
    return result
