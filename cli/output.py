"""Output formatting utilities for CLI."""

import typer
from rich.console import Console
from rich.syntax import Syntax

from dbmeta.exceptions import ScriptExecutionError

console = Console()
err_console = Console(stderr=True)

# Exit code for failures after argument parsing succeeded (I/O, database, script errors)
EXIT_RUNTIME_ERROR = 3


def print_sql(sql: str, title: str | None = None) -> None:
    """Print SQL to the terminal with syntax highlighting.

    Args:
        sql: SQL text
        title: Optional heading printed above the SQL
    """
    if title:
        console.rule(title)
    console.print(Syntax(sql, "sql", theme="monokai", line_numbers=False))


def error_message(message: str, hint: str | None = None) -> None:
    """Print error message.

    Args:
        message: Error message
        hint: Optional hint for user
    """
    typer.secho(f"✗ Error: {message}", fg=typer.colors.RED, err=True)
    if hint:
        typer.secho(f"  Hint: {hint}", fg=typer.colors.YELLOW, err=True)


def script_error_message(error: ScriptExecutionError) -> None:
    """Print a failed script statement and the database error."""
    error_message(str(error), hint="Statements before this one have already been committed")
    err_console.print(Syntax(error.statement, "sql", theme="monokai", line_numbers=True))


def success_message(message: str) -> None:
    """Print success message.

    Args:
        message: Success message
    """
    typer.secho(f"✓ {message}", fg=typer.colors.GREEN)
