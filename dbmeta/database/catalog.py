"""Database catalog introspection.

Reads domains, tables and stored procedures from the Firebird system tables.
All queries are read-only; failures propagate to the caller unchanged.
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import text
from sqlalchemy.engine import Connection

from dbmeta.database.type_mapping import classify_field_source, field_length, resolve_field_type
from dbmeta.models import (
    CatalogSnapshot,
    Column,
    Domain,
    FieldSpec,
    ParameterDirection,
    Procedure,
    ProcedureParameter,
    Table,
)

logger = logging.getLogger(__name__)

DOMAINS_QUERY = """
    SELECT RDB$FIELD_NAME, RDB$FIELD_TYPE, RDB$FIELD_LENGTH, RDB$CHARACTER_LENGTH,
           RDB$FIELD_PRECISION, RDB$FIELD_SCALE
    FROM RDB$FIELDS
    WHERE COALESCE(RDB$SYSTEM_FLAG, 0) = 0
      AND RDB$FIELD_NAME NOT STARTING WITH 'RDB$'
    ORDER BY RDB$FIELD_NAME
"""

TABLES_QUERY = """
    SELECT RDB$RELATION_NAME
    FROM RDB$RELATIONS
    WHERE COALESCE(RDB$SYSTEM_FLAG, 0) = 0
      AND RDB$VIEW_SOURCE IS NULL
    ORDER BY RDB$RELATION_ID
"""

COLUMNS_QUERY = """
    SELECT rf.RDB$FIELD_NAME, rf.RDB$FIELD_POSITION, rf.RDB$FIELD_SOURCE,
           f.RDB$FIELD_TYPE, f.RDB$FIELD_LENGTH, f.RDB$CHARACTER_LENGTH,
           f.RDB$FIELD_PRECISION, f.RDB$FIELD_SCALE
    FROM RDB$RELATION_FIELDS rf
    JOIN RDB$FIELDS f ON f.RDB$FIELD_NAME = rf.RDB$FIELD_SOURCE
    WHERE rf.RDB$RELATION_NAME = :relation_name
    ORDER BY rf.RDB$FIELD_POSITION
"""

PROCEDURES_QUERY = """
    SELECT RDB$PROCEDURE_NAME, RDB$PROCEDURE_SOURCE
    FROM RDB$PROCEDURES
    WHERE COALESCE(RDB$SYSTEM_FLAG, 0) = 0
      AND RDB$PACKAGE_NAME IS NULL
    ORDER BY RDB$PROCEDURE_ID
"""

PARAMETERS_QUERY = """
    SELECT pp.RDB$PARAMETER_NAME, pp.RDB$PARAMETER_TYPE, pp.RDB$PARAMETER_NUMBER, pp.RDB$FIELD_SOURCE,
           f.RDB$FIELD_TYPE, f.RDB$FIELD_LENGTH, f.RDB$CHARACTER_LENGTH,
           f.RDB$FIELD_PRECISION, f.RDB$FIELD_SCALE
    FROM RDB$PROCEDURE_PARAMETERS pp
    JOIN RDB$FIELDS f ON f.RDB$FIELD_NAME = pp.RDB$FIELD_SOURCE
    WHERE pp.RDB$PROCEDURE_NAME = :procedure_name
      AND pp.RDB$PACKAGE_NAME IS NULL
    ORDER BY pp.RDB$PARAMETER_TYPE, pp.RDB$PARAMETER_NUMBER
"""


def _field_spec(row: Sequence[Any]) -> FieldSpec:
    """Build field metadata from the trailing type columns of a catalog row"""
    field_type, length, character_length, precision, scale = row[-5:]
    return FieldSpec(
        field_type=field_type,
        length=length or 0,
        character_length=character_length,
        precision=precision,
        scale=scale,
    )


def _blob_text(value: Any) -> str:
    """Return the text of a BLOB SUB_TYPE TEXT value; large blobs arrive as readers"""
    if value is None:
        return ""
    if hasattr(value, "read"):
        return value.read()
    return value


class CatalogReader:
    """Reads schema objects from the catalog of an open connection.

    Each list method issues its own queries; run them on one connection to
    get a consistent view for a single export.
    """

    def __init__(self, connection: Connection) -> None:
        self.connection = connection

    def _fetch(self, query: str, **params: Any) -> list[Sequence[Any]]:
        result = self.connection.execute(text(query), params)
        return list(result.all())

    def list_domains(self) -> list[Domain]:
        """List user-defined domains.

        Returns:
            Domains ordered by name, with resolved SQL types
        """
        domains = []
        for row in self._fetch(DOMAINS_QUERY):
            field = _field_spec(row)
            domains.append(
                Domain(
                    name=row[0].strip(),
                    sql_type=resolve_field_type(field.field_type, field_length(field)),
                )
            )
        logger.debug(f"Read {len(domains)} domains")
        return domains

    def list_columns(self, table_name: str) -> list[Column]:
        """List the columns of a table in ordinal order.

        Args:
            table_name: Name of the table

        Returns:
            Columns ordered by position
        """
        columns = []
        for row in self._fetch(COLUMNS_QUERY, relation_name=table_name):
            name, position, field_source = row[0], row[1], row[2]
            columns.append(
                Column(
                    name=name.strip(),
                    position=position or 0,
                    field_ref=classify_field_source(field_source, _field_spec(row)),
                )
            )
        return columns

    def list_tables(self) -> list[Table]:
        """List user tables (system relations and views are excluded).

        Returns:
            Tables in creation order, each with its columns
        """
        table_names = [row[0].strip() for row in self._fetch(TABLES_QUERY)]
        tables = [Table(name=name, columns=self.list_columns(name)) for name in table_names]
        logger.debug(f"Read {len(tables)} tables")
        return tables

    def list_parameters(self, procedure_name: str) -> tuple[list[ProcedureParameter], list[ProcedureParameter]]:
        """List the parameters of a procedure.

        Args:
            procedure_name: Name of the procedure

        Returns:
            Tuple of (input parameters, output parameters), each by parameter number
        """
        inputs: list[ProcedureParameter] = []
        outputs: list[ProcedureParameter] = []
        for row in self._fetch(PARAMETERS_QUERY, procedure_name=procedure_name):
            name, direction, number, field_source = row[0], row[1], row[2], row[3]
            parameter = ProcedureParameter(
                name=name.strip(),
                direction=ParameterDirection(direction),
                position=number or 0,
                field_ref=classify_field_source(field_source, _field_spec(row)),
            )
            if parameter.direction is ParameterDirection.INPUT:
                inputs.append(parameter)
            else:
                outputs.append(parameter)
        return inputs, outputs

    def list_procedures(self) -> list[Procedure]:
        """List user stored procedures.

        Returns:
            Procedures in creation order with parameters and source text
        """
        procedures = []
        for name, source in self._fetch(PROCEDURES_QUERY):
            procedure_name = name.strip()
            inputs, outputs = self.list_parameters(procedure_name)
            procedures.append(
                Procedure(
                    name=procedure_name,
                    input_parameters=inputs,
                    output_parameters=outputs,
                    source=_blob_text(source),
                )
            )
        logger.debug(f"Read {len(procedures)} procedures")
        return procedures

    def read_snapshot(self) -> CatalogSnapshot:
        """Read domains, tables and procedures in one pass"""
        return CatalogSnapshot(
            domains=self.list_domains(),
            tables=self.list_tables(),
            procedures=self.list_procedures(),
        )
