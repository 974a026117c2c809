"""Pytest configuration and shared fixtures"""

import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from dbmeta.models import (
    BuiltInType,
    CatalogSnapshot,
    Column,
    Domain,
    FieldSpec,
    ParameterDirection,
    Procedure,
    ProcedureParameter,
    Table,
    UserDomain,
)

ADD_PRODUCT_SOURCE = "BEGIN\n    INSERT INTO PRODUCTS (ID, NAME) VALUES (:P_ID, :P_NAME);\nEND"


class FakeResult:
    """Result object returning fixed rows"""

    def __init__(self, rows: Sequence[tuple[Any, ...]]) -> None:
        self._rows = list(rows)

    def all(self) -> list[tuple[Any, ...]]:
        return list(self._rows)


class FakeCatalogConnection:
    """Connection stand-in that answers catalog queries from in-memory rows.

    Rows are keyed by the system table in the query's FROM clause; column and
    parameter rows are looked up by the bound relation/procedure name.
    """

    def __init__(
        self,
        domains: Sequence[tuple[Any, ...]] = (),
        tables: Sequence[tuple[Any, ...]] = (),
        columns: dict[str, list[tuple[Any, ...]]] | None = None,
        procedures: Sequence[tuple[Any, ...]] = (),
        parameters: dict[str, list[tuple[Any, ...]]] | None = None,
    ) -> None:
        self.domains = domains
        self.tables = tables
        self.columns = columns or {}
        self.procedures = procedures
        self.parameters = parameters or {}
        self.executed: list[tuple[str, dict[str, Any]]] = []

    def execute(self, statement: Any, params: dict[str, Any] | None = None) -> FakeResult:
        sql = str(statement)
        params = params or {}
        self.executed.append((sql, params))

        found = re.search(r"FROM\s+(RDB\$\w+)", sql)
        assert found is not None, f"Unexpected query: {sql}"

        match found.group(1):
            case "RDB$FIELDS":
                return FakeResult(self.domains)
            case "RDB$RELATIONS":
                return FakeResult(self.tables)
            case "RDB$RELATION_FIELDS":
                return FakeResult(self.columns.get(params["relation_name"], []))
            case "RDB$PROCEDURES":
                return FakeResult(self.procedures)
            case "RDB$PROCEDURE_PARAMETERS":
                return FakeResult(self.parameters.get(params["procedure_name"], []))
        raise AssertionError(f"Unexpected system table in: {sql}")


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory"""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def build_scripts_dir(fixtures_dir: Path) -> Path:
    """Return the directory with the PRODUCTS build scripts"""
    return fixtures_dir / "scripts1"


@pytest.fixture
def update_scripts_dir(fixtures_dir: Path) -> Path:
    """Return the directory with the PRODUCTS update scripts"""
    return fixtures_dir / "scripts2"


@pytest.fixture
def products_catalog() -> FakeCatalogConnection:
    """Return a fake catalog matching a database built from the PRODUCTS scripts.

    Names are padded the way CHAR catalog columns come back from the server.
    """
    return FakeCatalogConnection(
        domains=[("DM_NAME".ljust(63), 37, 400, 100, None, 0)],
        tables=[("PRODUCTS".ljust(63),)],
        columns={
            "PRODUCTS": [
                ("ID".ljust(63), 0, "RDB$1".ljust(63), 8, 4, None, 0, 0),
                ("NAME".ljust(63), 1, "DM_NAME".ljust(63), 37, 400, 100, None, 0),
            ]
        },
        procedures=[("ADD_PRODUCT".ljust(63), ADD_PRODUCT_SOURCE)],
        parameters={
            "ADD_PRODUCT": [
                ("P_ID".ljust(63), 0, 0, "RDB$2".ljust(63), 8, 4, None, 0, 0),
                ("P_NAME".ljust(63), 0, 1, "DM_NAME".ljust(63), 37, 400, 100, None, 0),
            ]
        },
    )


@pytest.fixture
def sample_snapshot() -> CatalogSnapshot:
    """Return a catalog snapshot of the PRODUCTS schema"""
    integer = BuiltInType(field=FieldSpec(field_type=8, length=4))
    return CatalogSnapshot(
        domains=[Domain(name="DM_NAME", sql_type="VARCHAR(100)")],
        tables=[
            Table(
                name="PRODUCTS",
                columns=[
                    Column(name="ID", position=0, field_ref=integer),
                    Column(name="NAME", position=1, field_ref=UserDomain(name="DM_NAME")),
                ],
            )
        ],
        procedures=[
            Procedure(
                name="ADD_PRODUCT",
                input_parameters=[
                    ProcedureParameter(name="P_ID", direction=ParameterDirection.INPUT, position=0, field_ref=integer),
                    ProcedureParameter(
                        name="P_NAME",
                        direction=ParameterDirection.INPUT,
                        position=1,
                        field_ref=UserDomain(name="DM_NAME"),
                    ),
                ],
                source=ADD_PRODUCT_SOURCE,
            )
        ],
    )


@pytest.fixture
def fake_catalog() -> type[FakeCatalogConnection]:
    """Return the fake catalog connection class for tests that build their own rows"""
    return FakeCatalogConnection
