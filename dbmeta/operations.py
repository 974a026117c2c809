"""Build, export and update operations

Each operation opens its own engine and disposes of it when it finishes,
whether it succeeds or fails.
"""

import json
import logging
from pathlib import Path

from pydantic import BaseModel, Field
from sqlalchemy.engine import URL

from dbmeta.database.catalog import CatalogReader
from dbmeta.database.engine import (
    DatabaseSettings,
    build_connection_url,
    create_database_engine,
    create_database_file,
    sanitize_connection_string,
)
from dbmeta.ddl import generate_schema_sql
from dbmeta.scripts.batch import StatementSplitter
from dbmeta.scripts.runner import classify_build_scripts, discover_scripts, run_script_files

logger = logging.getLogger(__name__)


class BuildResult(BaseModel):
    """Outcome of a database build"""

    database_path: Path = Field(description="Path of the created database file")
    connection_url: str = Field(description="Connection URL with the password masked")
    scripts_run: list[Path] = Field(default_factory=list, description="Script files in execution order")
    statements_executed: int = Field(ge=0, description="Number of statements executed")


class ExportResult(BaseModel):
    """Outcome of a schema export"""

    output_dir: Path = Field(description="Directory the files were written to")
    files: list[Path] = Field(default_factory=list, description="Written files")
    domain_count: int = Field(ge=0)
    table_count: int = Field(ge=0)
    procedure_count: int = Field(ge=0)
    ddl: dict[str, str] = Field(default_factory=dict, description="Generated DDL by file name")


def build_database(
    database_dir: Path,
    scripts_dir: Path,
    settings: DatabaseSettings | None = None,
    splitter: StatementSplitter | None = None,
) -> BuildResult:
    """Create a new database and run the build scripts against it.

    Scripts run in tiers: files whose name contains 'domain', then 'table',
    then 'proc'. Files matching none of these run last.

    Args:
        database_dir: Directory for the database file (created if missing)
        scripts_dir: Directory holding the *.sql build scripts
        settings: Database creation settings (defaults to SYSDBA, UTF8, 16k pages)
        splitter: Statement splitter for the scripts

    Returns:
        BuildResult describing the new database

    Raises:
        ScriptsDirectoryError: If the scripts directory does not exist
        ScriptExecutionError: If a script statement fails
    """
    settings = settings or DatabaseSettings()

    # Look up the scripts before creating anything
    plan = classify_build_scripts(discover_scripts(scripts_dir))

    database_dir.mkdir(parents=True, exist_ok=True)
    database_path = database_dir / settings.file_name
    create_database_file(database_path, settings)

    url = build_connection_url(database_path, settings)
    engine = create_database_engine(url)

    try:
        with engine.connect() as conn:
            executed = run_script_files(conn, plan.ordered(), splitter)
    finally:
        engine.dispose()

    logger.info(f"Built {database_path} with {executed} statements")
    return BuildResult(
        database_path=database_path,
        connection_url=url.render_as_string(hide_password=True),
        scripts_run=plan.ordered(),
        statements_executed=executed,
    )


def export_scripts(connection_string: str | URL, output_dir: Path, write_json: bool = False) -> ExportResult:
    """Export the schema of a database as SQL scripts.

    Writes domains.sql, tables.sql and procedures.sql into the output
    directory and, with write_json, the matching JSON snapshots.

    Args:
        connection_string: Database connection string
        output_dir: Directory for the generated files (created once the catalog has been read)
        write_json: Whether to also write domains.json, tables.json and procedures.json

    Returns:
        ExportResult with the written files and generated DDL
    """
    logger.info(f"Exporting schema from {sanitize_connection_string(str(connection_string))}")
    engine = create_database_engine(connection_string)

    try:
        with engine.connect() as conn:
            snapshot = CatalogReader(conn).read_snapshot()
    finally:
        engine.dispose()

    output_dir.mkdir(parents=True, exist_ok=True)
    ddl = generate_schema_sql(snapshot)
    files = []
    for file_name, content in ddl.items():
        path = output_dir / file_name
        path.write_text(content, encoding="utf-8", newline="\n")
        files.append(path)

    if write_json:
        sections = {
            "domains.json": snapshot.domains,
            "tables.json": snapshot.tables,
            "procedures.json": snapshot.procedures,
        }
        for file_name, items in sections.items():
            path = output_dir / file_name
            payload = json.dumps([item.model_dump(mode="json") for item in items], indent=2, ensure_ascii=False)
            path.write_text(payload + "\n", encoding="utf-8", newline="\n")
            files.append(path)

    return ExportResult(
        output_dir=output_dir,
        files=files,
        domain_count=len(snapshot.domains),
        table_count=len(snapshot.tables),
        procedure_count=len(snapshot.procedures),
        ddl=ddl,
    )


def update_database(
    connection_string: str | URL,
    scripts_dir: Path,
    splitter: StatementSplitter | None = None,
) -> int:
    """Apply every script of a directory to an existing database.

    Scripts run in file name order without classification; their authors are
    responsible for the order of the statements.

    Args:
        connection_string: Database connection string
        scripts_dir: Directory holding the *.sql update scripts
        splitter: Statement splitter for the scripts

    Returns:
        Number of statements executed

    Raises:
        ScriptsDirectoryError: If the scripts directory does not exist
        ScriptExecutionError: If a script statement fails
    """
    scripts = discover_scripts(scripts_dir)

    logger.info(f"Updating {sanitize_connection_string(str(connection_string))} with {len(scripts)} scripts")
    engine = create_database_engine(connection_string)

    try:
        with engine.connect() as conn:
            return run_script_files(conn, scripts, splitter)
    finally:
        engine.dispose()
