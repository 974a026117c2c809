"""Tests for statement splitting"""

from collections.abc import Iterator

import pytest

from dbmeta.scripts.batch import KeywordBoundarySplitter, clean_statement, split_statements

PROCEDURE_SCRIPT = """CREATE PROCEDURE GET_PRODUCT_COUNT
RETURNS (CNT INTEGER)
AS
BEGIN
    SELECT COUNT(*) FROM PRODUCTS INTO :CNT;
    SUSPEND;
END;
"""


def test_split_sequential_statements() -> None:
    """Test splitting top-level DDL and DML statements"""
    script = """
        CREATE DOMAIN DM_NAME AS VARCHAR(100);
        CREATE TABLE PRODUCTS (ID INTEGER, NAME DM_NAME);
        INSERT INTO PRODUCTS VALUES (1, 'a');
        UPDATE PRODUCTS SET NAME = 'b';
        DELETE FROM PRODUCTS;
        ALTER TABLE PRODUCTS ADD PRICE INTEGER;
        DROP TABLE PRODUCTS;
    """

    statements = list(split_statements(script))

    assert statements == [
        "CREATE DOMAIN DM_NAME AS VARCHAR(100)",
        "CREATE TABLE PRODUCTS (ID INTEGER, NAME DM_NAME)",
        "INSERT INTO PRODUCTS VALUES (1, 'a')",
        "UPDATE PRODUCTS SET NAME = 'b'",
        "DELETE FROM PRODUCTS",
        "ALTER TABLE PRODUCTS ADD PRICE INTEGER",
        "DROP TABLE PRODUCTS",
    ]


def test_keywords_are_case_insensitive() -> None:
    """Test lower-case statement keywords"""
    statements = list(split_statements("create table a (x integer);\ninsert into a values (1);"))
    assert statements == ["create table a (x integer)", "insert into a values (1)"]


def test_split_without_whitespace_between_statements() -> None:
    """Test a terminator directly followed by a keyword"""
    assert list(split_statements("DROP TABLE A;DROP TABLE B;")) == ["DROP TABLE A", "DROP TABLE B"]


def test_procedure_body_is_one_statement() -> None:
    """Test that semicolons inside a procedure body do not split it"""
    statements = list(split_statements(PROCEDURE_SCRIPT))

    assert len(statements) == 1
    assert statements[0].startswith("CREATE PROCEDURE GET_PRODUCT_COUNT")
    assert "SUSPEND;" in statements[0]
    assert statements[0].endswith("END")


def test_procedure_followed_by_statement() -> None:
    """Test a procedure between two top-level statements"""
    script = "ALTER TABLE PRODUCTS ADD PRICE INTEGER;\n\n" + PROCEDURE_SCRIPT + "\nDROP TABLE OLD_PRODUCTS;"

    statements = list(split_statements(script))

    assert len(statements) == 3
    assert statements[0] == "ALTER TABLE PRODUCTS ADD PRICE INTEGER"
    assert statements[1].startswith("CREATE PROCEDURE")
    assert statements[2] == "DROP TABLE OLD_PRODUCTS"


def test_keyword_must_be_a_whole_word() -> None:
    """Test that identifiers starting with a keyword do not split"""
    script = "EXECUTE BLOCK AS DECLARE X INTEGER; BEGIN X = 1; END;\nUPDATED_AT = 1;"
    assert len(list(split_statements(script))) == 1


def test_known_limitation_inner_statement_followed_by_keyword() -> None:
    """Test that an inner statement followed by a keyword splits the body"""
    script = "CREATE PROCEDURE P AS BEGIN\n  X = 1;\n  INSERT INTO T VALUES (1);\nEND;"

    statements = list(split_statements(script))

    assert statements == ["CREATE PROCEDURE P AS BEGIN\n  X = 1", "INSERT INTO T VALUES (1);\nEND"]


def test_script_without_terminator() -> None:
    """Test that a script without terminators is one statement"""
    assert list(split_statements("  SELECT 1 FROM RDB$DATABASE  \n")) == ["SELECT 1 FROM RDB$DATABASE"]


@pytest.mark.parametrize("script", ["", "   \n\t", ";", "\n;\n"])
def test_blank_scripts(script: str) -> None:
    """Test that blank pieces are discarded"""
    assert list(split_statements(script)) == []


def test_trailing_terminator_yields_no_empty_statement() -> None:
    """Test a script ending with a terminator and blank lines"""
    assert list(split_statements("CREATE TABLE A (X INTEGER);\n\n\n")) == ["CREATE TABLE A (X INTEGER)"]


def test_clean_statement_strips_single_terminator() -> None:
    """Test that only one trailing terminator is removed"""
    assert clean_statement("  DROP TABLE A;  ") == "DROP TABLE A"
    assert clean_statement("DROP TABLE A;;") == "DROP TABLE A;"
    assert clean_statement("DROP TABLE A") == "DROP TABLE A"


def test_split_is_lazy() -> None:
    """Test that statements are produced on demand"""
    result = KeywordBoundarySplitter().split("CREATE TABLE A (X INTEGER);\nCREATE TABLE B (Y INTEGER);")

    assert isinstance(result, Iterator)
    assert next(result) == "CREATE TABLE A (X INTEGER)"
    assert next(result) == "CREATE TABLE B (Y INTEGER)"
    with pytest.raises(StopIteration):
        next(result)


def test_rejoined_statements_split_the_same() -> None:
    """Test that joining statements with terminators reproduces the same statements"""
    script = "CREATE DOMAIN D AS INTEGER;\n" + PROCEDURE_SCRIPT + "INSERT INTO T VALUES (1);"
    statements = list(split_statements(script))

    rejoined = ";\n\n".join(statements) + ";"

    assert list(split_statements(rejoined)) == statements


def test_custom_splitter() -> None:
    """Test that another splitter can be plugged in"""

    class LineSplitter:
        def split(self, script: str) -> Iterator[str]:
            return (line for line in script.splitlines() if line)

    assert list(split_statements("a\nb", splitter=LineSplitter())) == ["a", "b"]
