# ABOUTME: The `libris dupe` command for checking a candidate book against the collection.
# ABOUTME: Reports ISBN or title/author matches; exits 1 on a match so scripts can branch.

from pathlib import Path

import click
from rich.console import Console

from libris.cli.options import collection_option, open_snapshot
from libris.library.duplicates import DUPLICATE_CHECK_LIMIT, MatchType, check_duplicate
from libris.library.normalizer import clean_isbn, is_isbn

console = Console()

_MATCH_LABELS = {
    MatchType.ISBN: "same ISBN",
    MatchType.TITLE_AUTHOR: "same title and author",
}


@click.command("dupe")
@click.argument("title")
@click.argument("author")
@click.option("--isbn", default=None, help="Candidate ISBN (prefixes, dashes, spaces allowed).")
@click.option(
    "--limit",
    type=click.IntRange(min=1),
    default=DUPLICATE_CHECK_LIMIT,
    show_default=True,
    help="Books scanned by the title/author check.",
)
@collection_option
def dupe(
    title: str, author: str, isbn: str | None, limit: int, collection_path: Path | None
) -> None:
    """Check whether a book is already in the collection."""
    if isbn and not is_isbn(isbn):
        console.print(f"[yellow]'{isbn}' does not look like an ISBN; checking anyway.[/yellow]")

    snapshot = open_snapshot(collection_path, console)
    result = check_duplicate(
        clean_isbn(isbn) or None, title, author, snapshot.active_books, limit=limit
    )

    if not result.is_duplicate or result.existing_book is None:
        console.print("[green]No duplicate found.[/green]")
        return

    existing = result.existing_book
    console.print(
        f"[yellow]Possible duplicate ({_MATCH_LABELS[result.match_type]}):[/yellow] "
        f"{existing.title} by {existing.author} [dim](id {existing.id})[/dim]"
    )
    raise SystemExit(1)
