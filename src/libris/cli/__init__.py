# ABOUTME: CLI package for Libris, built on Click.
# ABOUTME: Defines the root command group and registers subcommands.

import logging

import click

from libris.cli.commands import dupe_cmd, facets_cmd, health_cmd, ls_cmd, status_cmd


@click.group()
@click.version_option(package_name="libris")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """Libris - browse, de-duplicate, and check the health of a book collection."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


cli.add_command(ls_cmd.ls)
cli.add_command(facets_cmd.facets)
cli.add_command(dupe_cmd.dupe)
cli.add_command(health_cmd.health)
cli.add_command(status_cmd.status)
