# ABOUTME: The `libris health` command reporting collection completeness and missing data.
# ABOUTME: Shows the completeness score, its rating band, issue counts, and books to fix.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from libris.cli.options import collection_option, open_snapshot
from libris.library.health import (
    HEALTH_FIELDS,
    ISSUE_FIELDS,
    analyze_library,
    books_with_issues,
    completeness_rating,
)

console = Console()

_RICH_COLOURS = {"green": "green", "amber": "yellow", "red": "red"}


@click.command("health")
@collection_option
@click.option("--json", "json_output", is_flag=True, default=False, help="Output as JSON.")
@click.option(
    "--top",
    type=click.IntRange(min=0),
    default=10,
    show_default=True,
    help="Number of books with the most issues to list.",
)
def health(collection_path: Path | None, json_output: bool, top: int) -> None:
    """Report how complete the collection's book data is."""
    snapshot = open_snapshot(collection_path, console)
    report = analyze_library(snapshot.books)
    rating = completeness_rating(report.completeness_score)

    if json_output:
        data = {
            "total_books": report.total_books,
            "completeness_score": report.completeness_score,
            "rating": rating.label,
            "total_issues": report.total_issues,
            "fixable_books": report.fixable_books,
            "issues": {
                issue.value: [book.id for book in books]
                for issue, books in report.issues.items()
            },
        }
        click.echo(json_lib.dumps(data, indent=2))
        return

    colour = _RICH_COLOURS[rating.colour]
    console.print(
        f"[bold]Completeness:[/bold] [{colour}]{report.completeness_score}% "
        f"({rating.label})[/{colour}]"
    )
    console.print(
        f"{report.total_books} book(s), {report.total_issues} missing field(s), "
        f"{report.fixable_books} fixable by ISBN lookup"
    )

    if report.total_books == 0:
        return

    table = Table(title="Missing Fields")
    table.add_column("Field", style="bold")
    table.add_column("Books", justify="right")
    for issue, field_name in ISSUE_FIELDS.items():
        table.add_row(HEALTH_FIELDS[field_name].label, str(len(report.issues[issue])))
    console.print(table)

    entries = books_with_issues(report)[:top]
    if not entries:
        return

    console.print("\n[bold]Books needing attention[/bold]")
    for entry in entries:
        console.print(f"  {entry.book.title} [dim]({entry.book.id})[/dim]: {', '.join(entry.missing)}")
