"""Main entry point for sqlgen CLI tool."""

import typer

from cli import __version__
from cli.commands import config
from cli.commands.generate import procedures, tables, views
from cli.output import configure_logging

# Create main app
app = typer.Typer(
    name="sqlgen",
    help="Generate stored procedures and join views from a database schema",
    no_args_is_help=True,
    add_completion=False,
)

# Add subcommands
app.command(name="procedures")(procedures)
app.command(name="views")(views)
app.command(name="tables")(tables)
app.add_typer(config.app, name="config")


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"sqlgen version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log catalog queries and skipped objects"),
) -> None:
    """Generate stored procedures and join views from a database schema.

    Examples:

        # CRUD procedures for every table with a primary key
        sqlgen procedures sqlite:///shop.db --output procs.sql

        # Join views along foreign key chains, using a named connection
        sqlgen views @northwind --schema dbo

        # Inspect what the generators will see
        sqlgen tables sqlite:///shop.db

    For detailed help on each command:
        sqlgen procedures --help
        sqlgen views --help
    """
    configure_logging(verbose)


if __name__ == "__main__":
    app()
