# ABOUTME: The `libris ls` command for browsing a filtered, sorted view of the collection.
# ABOUTME: Displays a Rich table (or JSON) of the books matching the given filters.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from libris.cli.options import build_filters, collection_option, filter_options, open_snapshot
from libris.collection.mapping import book_to_dict
from libris.library.filters import filter_books
from libris.library.sorting import sort_books
from libris.library.status import STATUS_LABELS, derive_status
from libris.library.types import SortDirection, SortKey

console = Console()


@click.command("ls")
@collection_option
@filter_options
@click.option(
    "--sort",
    "sort_key",
    type=click.Choice([k.value for k in SortKey]),
    default=SortKey.CREATED_AT.value,
    show_default=True,
    help="Sort key.",
)
@click.option("--desc", is_flag=True, default=False, help="Sort in descending order.")
@click.option(
    "--include-deleted",
    is_flag=True,
    default=False,
    help="Include books that are in the bin.",
)
@click.option("--json", "json_output", is_flag=True, default=False, help="Output as JSON.")
def ls(
    collection_path: Path | None,
    search: str | None,
    statuses: tuple[str, ...],
    genres: tuple[str, ...],
    series: tuple[str, ...],
    min_rating: int | None,
    author: str | None,
    sort_key: str,
    desc: bool,
    include_deleted: bool,
    json_output: bool,
) -> None:
    """List books in the collection, filtered and sorted."""
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

    population = snapshot.books if include_deleted else snapshot.active_books
    direction = SortDirection.DESC if desc else SortDirection.ASC
    books = sort_books(filter_books(population, filters), sort_key, direction)

    if json_output:
        click.echo(json_lib.dumps([book_to_dict(b) for b in books], indent=2, default=str))
        return

    if not books:
        if filters.is_active:
            console.print("[yellow]No books match the current filters.[/yellow]")
        else:
            console.print("[yellow]No books in the collection.[/yellow]")
        return

    genre_names = {g.id: g.name for g in snapshot.genres}
    series_names = {s.id: s.name for s in snapshot.series}

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Status")
    table.add_column("Rating", justify="right")
    table.add_column("Genres")
    table.add_column("Series")

    for book in books:
        series_display = ""
        if book.series_id:
            series_display = series_names.get(book.series_id, book.series_id)
            if book.series_position is not None:
                series_display = f"{series_display} #{book.series_position:g}"

        table.add_row(
            book.id,
            book.title,
            book.author or "[dim]unknown[/dim]",
            STATUS_LABELS[derive_status(book)],
            "★" * book.rating if book.rating else "",
            ", ".join(genre_names.get(g, g) for g in book.genres),
            series_display,
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} of {len(population)} book(s)[/dim]")
