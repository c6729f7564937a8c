# ABOUTME: The `libris facets` command showing per-option counts for every filter dimension.
# ABOUTME: Counts are taken over the filtered view, so active filters narrow the other options.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from libris.cli.options import build_filters, collection_option, filter_options, open_snapshot
from libris.library.facets import FacetOption, collect_authors, count_facets, facet_options
from libris.library.filters import filter_books

console = Console()

_DIMENSION_TITLES = {
    "statuses": "Status",
    "ratings": "Rating",
    "genres": "Genre",
    "series": "Series",
    "authors": "Author",
}


def _option_row(option: FacetOption) -> tuple[str, str]:
    if option.disabled:
        return f"[dim]{option.label}[/dim]", f"[dim]({option.count})[/dim]"
    if option.selected:
        return f"[bold]* {option.label}[/bold]", f"({option.count})"
    return option.label, f"({option.count})"


@click.command("facets")
@collection_option
@filter_options
def facets(
    collection_path: Path | None,
    search: str | None,
    statuses: tuple[str, ...],
    genres: tuple[str, ...],
    series: tuple[str, ...],
    min_rating: int | None,
    author: str | None,
) -> None:
    """Show how many books fall under each filter option."""
    snapshot = open_snapshot(collection_path, console)
    filters = build_filters(
        snapshot,
        search=search,
        statuses=statuses,
        genres=genres,
        series=series,
        min_rating=min_rating,
        author=author,
    )

    active = snapshot.active_books
    visible = filter_books(active, filters)
    authors = collect_authors(active)
    counts = count_facets(visible, snapshot.genres, snapshot.series, authors)
    options = facet_options(counts, filters, snapshot.genres, snapshot.series, authors)

    for dimension, title in _DIMENSION_TITLES.items():
        dimension_options = options[dimension]
        if not dimension_options:
            continue
        table = Table(title=title, show_header=False)
        table.add_column("Option")
        table.add_column("Count", justify="right")
        for option in dimension_options:
            table.add_row(*_option_row(option))
        console.print(table)

    console.print(f"\n[dim]{counts.total} of {len(active)} book(s) visible[/dim]")
