"""DDL text generation for catalog objects.

Each formatter renders one object followed by a blank line; the generate_*
functions concatenate them into the text of one export file. Output only
depends on the input order, so exporting an unchanged database twice gives
identical files.
"""

from collections.abc import Iterable

from dbmeta.database.type_mapping import render_field_ref
from dbmeta.models import CatalogSnapshot, Column, Domain, Procedure, ProcedureParameter, Table

INDENT = "    "


def format_domain(domain: Domain) -> str:
    """Render a CREATE DOMAIN statement"""
    return f"CREATE DOMAIN {domain.name} AS {domain.sql_type};\n\n"


def _format_column(column: Column) -> str:
    return f"{INDENT}{column.name} {render_field_ref(column.field_ref)}"


def format_table(table: Table) -> str:
    """Render a CREATE TABLE statement with columns in ordinal order"""
    columns = sorted(table.columns, key=lambda c: c.position)
    body = ",\n".join(_format_column(column) for column in columns)
    return f"CREATE TABLE {table.name} (\n{body}\n);\n\n"


def _format_parameters(parameters: list[ProcedureParameter]) -> str:
    ordered = sorted(parameters, key=lambda p: p.position)
    return ",\n".join(f"{INDENT}{p.name} {render_field_ref(p.field_ref)}" for p in ordered)


def format_procedure(procedure: Procedure) -> str:
    """Render a CREATE OR ALTER PROCEDURE statement.

    The argument list is omitted for procedures without input parameters and
    the RETURNS clause for procedures without output parameters. The body is
    terminated with exactly one semicolon.
    """
    lines = [f"CREATE OR ALTER PROCEDURE {procedure.name}"]
    if procedure.input_parameters:
        lines.append(f"(\n{_format_parameters(procedure.input_parameters)}\n)")
    if procedure.output_parameters:
        lines.append(f"RETURNS (\n{_format_parameters(procedure.output_parameters)}\n)")
    lines.append("AS")

    body = procedure.source.strip()
    if not body.endswith(";"):
        body += ";"
    lines.append(body)

    return "\n".join(lines) + "\n\n"


def generate_domains_sql(domains: Iterable[Domain]) -> str:
    """Render the domains export file"""
    return "".join(format_domain(domain) for domain in domains)


def generate_tables_sql(tables: Iterable[Table]) -> str:
    """Render the tables export file"""
    return "".join(format_table(table) for table in tables)


def generate_procedures_sql(procedures: Iterable[Procedure]) -> str:
    """Render the procedures export file"""
    return "".join(format_procedure(procedure) for procedure in procedures)


def generate_schema_sql(snapshot: CatalogSnapshot) -> dict[str, str]:
    """Render all export files of a snapshot.

    Args:
        snapshot: Catalog snapshot

    Returns:
        Mapping of file name to DDL text, in dependency order (domains, tables, procedures)
    """
    return {
        "domains.sql": generate_domains_sql(snapshot.domains),
        "tables.sql": generate_tables_sql(snapshot.tables),
        "procedures.sql": generate_procedures_sql(snapshot.procedures),
    }
