"""Database access, catalog introspection and type mapping.

This package provides utilities for connecting to Firebird databases and
reading schema objects from their system tables.
"""

from dbmeta.database.catalog import CatalogReader
from dbmeta.database.engine import (
    DatabaseSettings,
    build_connection_url,
    create_database_engine,
    create_database_file,
    sanitize_connection_string,
)
from dbmeta.database.type_mapping import (
    SYSTEM_NAME_PREFIX,
    FieldType,
    classify_field_source,
    field_length,
    is_system_name,
    render_field_ref,
    resolve_field_type,
)

__all__ = [
    # Engine
    "DatabaseSettings",
    "build_connection_url",
    "create_database_engine",
    "create_database_file",
    "sanitize_connection_string",
    # Type mapping
    "SYSTEM_NAME_PREFIX",
    "FieldType",
    "classify_field_source",
    "field_length",
    "is_system_name",
    "render_field_ref",
    "resolve_field_type",
    # Catalog
    "CatalogReader",
]
