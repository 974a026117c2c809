"""Splitting of SQL script text into executable statements.

The default splitter cuts a script after a ``;`` only when the next word is
one of the statement keywords below. A ``;`` inside a procedure body that is
followed by anything else (``END``, ``SUSPEND``, an assignment) stays in the
enclosing statement.

Known limitation: an inner procedure statement that ends with ``;`` and is
followed by e.g. ``INSERT`` or ``UPDATE`` is split at that point. Existing
scripts rely on this behavior, so it is kept as is; a block-aware tokenizer
can be plugged in through the StatementSplitter protocol.
"""

import re
from collections.abc import Iterator
from typing import Protocol

STATEMENT_KEYWORDS = ("CREATE", "ALTER", "DROP", "INSERT", "UPDATE", "DELETE")

TERMINATOR = ";"

STATEMENT_BOUNDARY = re.compile(
    r"(?<=;)\s*(?=(?:" + "|".join(STATEMENT_KEYWORDS) + r")\b)",
    re.IGNORECASE,
)


class StatementSplitter(Protocol):
    """Splits script text into standalone statements"""

    def split(self, script: str) -> Iterator[str]: ...


def clean_statement(piece: str) -> str:
    """Trim a statement and drop a single trailing terminator"""
    statement = piece.strip()
    if statement.endswith(TERMINATOR):
        statement = statement[:-1].rstrip()
    return statement


class KeywordBoundarySplitter:
    """Splits at terminators that are followed by a statement keyword"""

    def __init__(self, boundary: re.Pattern[str] = STATEMENT_BOUNDARY) -> None:
        self.boundary = boundary

    def split(self, script: str) -> Iterator[str]:
        """Yield the statements of a script in order.

        Args:
            script: Raw script text

        Yields:
            Trimmed statements without their trailing terminator; blank pieces are skipped
        """
        start = 0
        for match in self.boundary.finditer(script):
            statement = clean_statement(script[start : match.start()])
            if statement:
                yield statement
            start = match.end()

        statement = clean_statement(script[start:])
        if statement:
            yield statement


DEFAULT_SPLITTER = KeywordBoundarySplitter()


def split_statements(script: str, splitter: StatementSplitter | None = None) -> Iterator[str]:
    """Split a script with the given splitter (keyword boundary splitter by default)"""
    return (splitter or DEFAULT_SPLITTER).split(script)
