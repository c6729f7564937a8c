# ABOUTME: Shared Click options and helpers for Libris CLI commands.
# ABOUTME: Provides the --collection option, filter options, and catalog name resolution.

from collections.abc import Callable, Sequence
from pathlib import Path

import click
from rich.console import Console

from libris.collection.snapshot import (
    DEFAULT_COLLECTION_PATH,
    LibrarySnapshot,
    SnapshotError,
    load_snapshot,
)
from libris.library.normalizer import normalize_genre_name, normalize_series_name
from libris.library.types import BookFilters, Genre, ReadingStatus, Series

collection_option = click.option(
    "--collection",
    "collection_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="LIBRIS_COLLECTION",
    help=f"Path to collection snapshot (default: {DEFAULT_COLLECTION_PATH})",
)

_FILTER_OPTIONS = [
    click.option("--search", default=None, help="Match title or author (case-insensitive)."),
    click.option(
        "--status",
        "statuses",
        multiple=True,
        type=click.Choice([s.value for s in ReadingStatus]),
        help="Reading status; repeat to match any of several.",
    ),
    click.option(
        "--genre", "genres", multiple=True, help="Genre id or name; repeat to match any."
    ),
    click.option(
        "--series", "series", multiple=True, help="Series id or name; repeat to match any."
    ),
    click.option(
        "--min-rating",
        type=click.IntRange(1, 5),
        default=None,
        help="Only books rated at least this many stars.",
    ),
    click.option("--author", default=None, help="Exact author name (case-insensitive)."),
]


def filter_options(func: Callable) -> Callable:
    """Attach the shared filter options to a command."""
    for option in reversed(_FILTER_OPTIONS):
        func = option(func)
    return func


def open_snapshot(path: Path | None, console: Console) -> LibrarySnapshot:
    """Load the collection snapshot or exit with an error message."""
    try:
        return load_snapshot(path or DEFAULT_COLLECTION_PATH)
    except SnapshotError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc


def resolve_genre_ids(values: Sequence[str], genres: Sequence[Genre]) -> list[str]:
    """Map genre ids or names to ids. Unknown values are passed through as ids."""
    by_name = {normalize_genre_name(g.name): g.id for g in genres}
    known_ids = {g.id for g in genres}
    return [
        value if value in known_ids else by_name.get(normalize_genre_name(value), value)
        for value in values
    ]


def resolve_series_ids(values: Sequence[str], series: Sequence[Series]) -> list[str]:
    """Map series ids or names to ids; "The" prefixes are ignored when matching names."""
    by_name = {normalize_series_name(s.name): s.id for s in series}
    known_ids = {s.id for s in series}
    return [
        value if value in known_ids else by_name.get(normalize_series_name(value), value)
        for value in values
    ]


def build_filters(
    snapshot: LibrarySnapshot,
    *,
    search: str | None,
    statuses: Sequence[str],
    genres: Sequence[str],
    series: Sequence[str],
    min_rating: int | None,
    author: str | None,
) -> BookFilters:
    """Turn raw filter option values into a BookFilters query."""
    return BookFilters(
        search=search,
        statuses=tuple(ReadingStatus(s) for s in statuses),
        genre_ids=tuple(resolve_genre_ids(genres, snapshot.genres)),
        series_ids=tuple(resolve_series_ids(series, snapshot.series)),
        min_rating=min_rating,
        author=author,
    )
