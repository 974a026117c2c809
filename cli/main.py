"""Main entry point for dbmeta CLI tool."""

import logging
import sys

import typer

from cli import __version__
from cli.commands import config
from cli.commands.build import build_db
from cli.commands.export import export_scripts
from cli.commands.update import update_db

# Exit code for a missing or invalid argument, unknown commands and no arguments at all
EXIT_USAGE_ERROR = 1

# Exit code Typer uses for usage errors in standalone mode
PARSER_USAGE_ERROR = 2

# Create main app
app = typer.Typer(
    name="dbmeta",
    help="Build, export and update Firebird database schemas",
    no_args_is_help=True,
    add_completion=False,
)

# Add subcommands
app.command(name="build-db")(build_db)
app.command(name="export-scripts")(export_scripts)
app.command(name="update-db")(update_db)
app.add_typer(config.app, name="config")


def version_callback(show_version: bool) -> None:
    """Show version and exit.

    Args:
        show_version: Whether to show version
    """
    if show_version:
        typer.echo(f"dbmeta version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log every file and statement"),
) -> None:
    """Build, export and update Firebird database schemas.

    Examples:

        # Build a new database from scripts
        dbmeta build-db --db-dir ./db --scripts-dir ./scripts

        # Export the schema of a database
        dbmeta export-scripts --connection-string @dev --output-dir ./out

        # Apply update scripts
        dbmeta update-db --connection-string @dev --scripts-dir ./updates

    For detailed help on each command:
        dbmeta build-db --help
        dbmeta export-scripts --help
        dbmeta update-db --help
    """
    configure_logging(verbose)


def run() -> None:
    """Console script entry point.

    Usage errors exit with EXIT_USAGE_ERROR instead of the parser default of 2.
    Without arguments the help is printed and the exit code is EXIT_USAGE_ERROR too.
    Runtime failures keep the code chosen by the command.
    """
    args = sys.argv[1:]
    try:
        app(args or ["--help"], prog_name="dbmeta")
    except SystemExit as e:
        if not args or e.code == PARSER_USAGE_ERROR:
            sys.exit(EXIT_USAGE_ERROR)
        raise


if __name__ == "__main__":
    run()
