"""Schema export command."""

from pathlib import Path

import typer

from cli.output import EXIT_RUNTIME_ERROR, error_message, print_sql, success_message
from dbmeta.operations import export_scripts as run_export


def export_scripts(
    connection_string: str = typer.Option(
        ..., "--connection-string", help="Database URL or @name of a configured connection"
    ),
    output_dir: Path = typer.Option(..., "--output-dir", help="Directory for the generated scripts", file_okay=False),
    write_json: bool | None = typer.Option(
        None, "--json/--no-json", help="Also write domains.json, tables.json and procedures.json"
    ),
    show: bool = typer.Option(False, "--show", help="Print the generated DDL"),
) -> None:
    """Export domains, tables and procedures of a database as SQL scripts.

    Example:
        dbmeta export-scripts --connection-string firebird+firebird://SYSDBA:masterkey@//data/app.fdb --output-dir ./out
    """
    try:
        from cli.config import get_export_defaults, resolve_connection

        if write_json is None:
            write_json = get_export_defaults().write_json

        result = run_export(resolve_connection(connection_string), output_dir, write_json=write_json)

        if show:
            for file_name, sql in result.ddl.items():
                print_sql(sql, title=file_name)

        success_message(
            f"Exported {result.domain_count} domains, {result.table_count} tables and "
            f"{result.procedure_count} procedures to {result.output_dir}"
        )

    except KeyError as e:
        error_message(str(e.args[0]), hint="Add it with 'dbmeta config set-connection'")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except OSError as e:
        error_message(str(e), hint="Check that the output directory is writable")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
    except Exception as e:
        error_message(f"Failed to export scripts: {e}")
        raise typer.Exit(EXIT_RUNTIME_ERROR) from e
