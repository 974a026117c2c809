"""Database build command."""

from pathlib import Path

import typer

from cli.output import EXIT_RUNTIME_ERROR, error_message, script_error_message, success_message
from dbmeta.exceptions import ScriptExecutionError, ScriptsDirectoryError
from dbmeta.operations import build_database


def build_db(
    db_dir: Path = typer.Option(..., "--db-dir", help="Directory for the new database file", file_okay=False),
    scripts_dir: Path = typer.Option(..., "--scripts-dir", help="Directory with the *.sql build scripts"),
    page_size: int | None = typer.Option(None, "--page-size", help="Page size of the new database"),
    overwrite: bool = typer.Option(True, "--overwrite/--no-overwrite", help="Replace an existing database file"),
) -> None:
    """Build a new database from a directory of SQL scripts.

    Scripts run in three tiers chosen by file name: files containing 'domain',
    then 'table', then 'proc'. Other files run last.

    Example:
        dbmeta build-db --db-dir ./db --scripts-dir ./scripts
    """
    try:
        # Load config for defaults
        from cli.config import get_database_defaults

        settings = get_database_defaults().to_settings(page_size=page_size, overwrite=overwrite)

        result = build_database(db_dir, scripts_dir, settings=settings)

        success_message(
            f"Database built at {result.database_path} "
            f"({len(result.scripts_run)} scripts, {result.statements_executed} statements)"
        )

    except ScriptsDirectoryError as e:
        error_message(str(e), hint="Check the --scripts-dir path")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except ScriptExecutionError as e:
        script_error_message(e)
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except FileExistsError as e:
        error_message(str(e), hint="Use --overwrite to replace it")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except Exception as e:
        error_message(f"Failed to build database: {e}")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
