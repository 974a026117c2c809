"""Execution of SQL script files against an open connection."""

import logging
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field
from sqlalchemy.engine import Connection
from sqlalchemy.exc import DBAPIError

from dbmeta.exceptions import ScriptExecutionError, ScriptsDirectoryError
from dbmeta.models import Script
from dbmeta.scripts.batch import StatementSplitter, split_statements

logger = logging.getLogger(__name__)

SCRIPT_PATTERN = "*.sql"

# Build tiers in execution order; a file joins the first tier whose marker is in its name
BUILD_TIERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("domains", ("domain",)),
    ("tables", ("table",)),
    ("procedures", ("proc",)),
)


class BuildPlan(BaseModel):
    """Script files of a build, grouped by dependency tier"""

    domains: list[Path] = Field(default_factory=list)
    tables: list[Path] = Field(default_factory=list)
    procedures: list[Path] = Field(default_factory=list)
    unclassified: list[Path] = Field(default_factory=list)

    def ordered(self) -> list[Path]:
        """Files in execution order: domains, tables, procedures, then the rest"""
        return [*self.domains, *self.tables, *self.procedures, *self.unclassified]


def discover_scripts(directory: Path) -> list[Path]:
    """List the script files of a directory sorted by name.

    Args:
        directory: Scripts directory

    Returns:
        Paths of the *.sql files

    Raises:
        ScriptsDirectoryError: If the directory does not exist
    """
    if not directory.is_dir():
        raise ScriptsDirectoryError(directory)
    return sorted((p for p in directory.glob(SCRIPT_PATTERN) if p.is_file()), key=lambda p: p.name)


def classify_build_scripts(paths: Iterable[Path]) -> BuildPlan:
    """Group build scripts into domain, table and procedure tiers by file name.

    Args:
        paths: Script files

    Returns:
        BuildPlan with each file in its tier, input order kept within a tier
    """
    plan = BuildPlan()
    for path in paths:
        name = path.name.lower()
        for tier, markers in BUILD_TIERS:
            if any(marker in name for marker in markers):
                getattr(plan, tier).append(path)
                break
        else:
            logger.warning(f"Script {path.name} matches no build tier, it will run last")
            plan.unclassified.append(path)
    return plan


def read_script_text(path: Path) -> str:
    """Read a script file as UTF-8 (a byte order mark is ignored)"""
    return path.read_text(encoding="utf-8-sig")


def load_script(path: Path, splitter: StatementSplitter | None = None) -> Script:
    """Read a script file and split it into statements"""
    return Script(path=path, statements=list(split_statements(read_script_text(path), splitter)))


def _execute_statements(connection: Connection, statements: Iterable[str], path: Path | None) -> int:
    count = 0
    for statement in statements:
        logger.debug(f"Executing: {statement[:80]}")
        try:
            connection.exec_driver_sql(statement)
            connection.commit()
        except DBAPIError as e:
            connection.rollback()
            raise ScriptExecutionError(statement, path, e) from e
        count += 1
    return count


def run_script(
    connection: Connection,
    script: str,
    splitter: StatementSplitter | None = None,
    path: Path | None = None,
) -> int:
    """Execute the statements of a script one by one.

    Each statement is committed before the next one runs, so objects created
    earlier in the script are visible to later statements. The first failure
    stops the run; statements already committed stay in place.

    Args:
        connection: Open connection
        script: Raw script text
        splitter: Statement splitter (keyword boundary splitter by default)
        path: Source file, used in error reports

    Returns:
        Number of statements executed

    Raises:
        ScriptExecutionError: If a statement fails
    """
    return _execute_statements(connection, split_statements(script, splitter), path)


def run_script_files(
    connection: Connection,
    paths: Iterable[Path],
    splitter: StatementSplitter | None = None,
) -> int:
    """Execute script files in the given order.

    Args:
        connection: Open connection
        paths: Script files
        splitter: Statement splitter (keyword boundary splitter by default)

    Returns:
        Total number of statements executed

    Raises:
        ScriptExecutionError: If a statement fails; later files are not run
    """
    total = 0
    for path in paths:
        logger.info(f"Running script {path.name}")
        script = load_script(path, splitter)
        total += _execute_statements(connection, script.statements, script.path)
    return total
