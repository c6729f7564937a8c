# ABOUTME: The `libris status` command showing a book's derived status and reading history.
# ABOUTME: Lists every reading session; the last one decides the current status.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from libris.cli.options import collection_option, open_snapshot
from libris.library.status import STATUS_LABELS, derive_status

console = Console()


@click.command("status")
@click.argument("book_id")
@collection_option
def status(book_id: str, collection_path: Path | None) -> None:
    """Show the reading status and sessions of a book by ID."""
    snapshot = open_snapshot(collection_path, console)
    book = snapshot.get_book(book_id)

    if book is None:
        console.print(f"[red]Book {book_id} not found.[/red]")
        raise SystemExit(1)

    console.print(f"[bold]{book.title}[/bold] by {book.author or 'unknown'}")
    console.print(f"Status: {STATUS_LABELS[derive_status(book)]}")
    if book.is_deleted:
        console.print("[yellow]This book is in the bin.[/yellow]")

    if not book.reads:
        return

    table = Table(title="Reading Sessions")
    table.add_column("#", style="dim")
    table.add_column("Started")
    table.add_column("Finished")
    for index, session in enumerate(book.reads, start=1):
        table.add_row(
            str(index),
            str(session.started_at) if session.started_at else "-",
            str(session.finished_at) if session.finished_at else "-",
        )
    console.print(table)
