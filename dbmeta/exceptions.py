"""Errors raised by dbmeta operations."""

from pathlib import Path


class DbMetaError(Exception):
    """Base class for dbmeta errors"""


class ScriptsDirectoryError(DbMetaError):
    """Raised when a scripts directory is missing or is not a directory"""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        super().__init__(f"Scripts directory not found: {directory}")


class ScriptExecutionError(DbMetaError):
    """Raised when a script statement fails; the remaining statements are not run.

    Attributes:
        statement: The statement text that failed
        path: The script file the statement came from, if any
        cause: The underlying database error
    """

    def __init__(self, statement: str, path: Path | None, cause: Exception) -> None:
        self.statement = statement
        self.path = path
        self.cause = cause
        location = f" in {path.name}" if path is not None else ""
        super().__init__(f"Statement failed{location}: {cause}")
