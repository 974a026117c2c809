"""Database update command."""

from pathlib import Path

import typer

from cli.output import EXIT_RUNTIME_ERROR, error_message, script_error_message, success_message
from dbmeta.exceptions import ScriptExecutionError, ScriptsDirectoryError
from dbmeta.operations import update_database


def update_db(
    connection_string: str = typer.Option(
        ..., "--connection-string", help="Database URL or @name of a configured connection"
    ),
    scripts_dir: Path = typer.Option(..., "--scripts-dir", help="Directory with the *.sql update scripts"),
) -> None:
    """Apply update scripts to an existing database.

    All *.sql files run in file name order.

    Example:
        dbmeta update-db --connection-string @prod --scripts-dir ./updates
    """
    try:
        from cli.config import resolve_connection

        executed = update_database(resolve_connection(connection_string), scripts_dir)

        success_message(f"Database updated ({executed} statements)")

    except KeyError as e:
        error_message(str(e.args[0]), hint="Add it with 'dbmeta config set-connection'")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except ScriptsDirectoryError as e:
        error_message(str(e), hint="Check the --scripts-dir path")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except ScriptExecutionError as e:
        script_error_message(e)
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except Exception as e:
        error_message(f"Failed to update database: {e}")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
