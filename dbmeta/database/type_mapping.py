"""Catalog type code mapping utilities."""

from enum import IntEnum

from dbmeta.models import BuiltInType, FieldRef, FieldSpec, UserDomain

# Catalog-internal names (system domains, system tables) carry this prefix
SYSTEM_NAME_PREFIX = "RDB$"


class FieldType(IntEnum):
    """Firebird field type codes (RDB$FIELD_TYPE) with a dedicated SQL type."""

    SMALLINT = 7
    INTEGER = 8
    CHAR = 14
    BIGINT = 16
    VARCHAR = 37
    BLOB = 261


CHARACTER_TYPES = frozenset({FieldType.CHAR, FieldType.VARCHAR})


def resolve_field_type(field_type: int, length: int | None) -> str:
    """Map a catalog field type code to an SQL type declaration.

    Args:
        field_type: The catalog field type code (e.g. 37 for VARCHAR)
        length: Character length for character types, otherwise the field length

    Returns:
        The SQL type declaration (e.g. 'VARCHAR(100)', 'INTEGER')
    """
    match field_type:
        case FieldType.SMALLINT:
            return "SMALLINT"
        case FieldType.INTEGER:
            return "INTEGER"
        case FieldType.BIGINT:
            return "BIGINT"
        case FieldType.CHAR:
            return f"CHAR({length})"
        case FieldType.VARCHAR:
            return f"VARCHAR({length})"
        case _:
            # Everything else is exported as a blob
            return "BLOB"


def field_length(field: FieldSpec) -> int:
    """Return the length that applies to a field's type declaration.

    Args:
        field: Field type metadata

    Returns:
        The character length for character types when known, otherwise the stored length
    """
    if field.field_type in CHARACTER_TYPES and field.character_length is not None:
        return field.character_length
    return field.length


def is_system_name(name: str) -> bool:
    """Check whether a catalog name is engine-generated (e.g. 'RDB$123')"""
    return name.startswith(SYSTEM_NAME_PREFIX)


def classify_field_source(field_source: str, field: FieldSpec) -> FieldRef:
    """Classify the field source of a column or parameter.

    A source without the system prefix names a user domain and is referenced
    verbatim. A system-generated source stands for an inline type declaration,
    which is resolved from the field's type metadata.

    Args:
        field_source: RDB$FIELD_SOURCE of the column or parameter
        field: Type metadata of the source field

    Returns:
        UserDomain or BuiltInType reference
    """
    name = field_source.strip()
    if not is_system_name(name):
        return UserDomain(name=name)
    return BuiltInType(field=field)


def render_field_ref(ref: FieldRef) -> str:
    """Render a field reference as it appears in DDL"""
    match ref:
        case UserDomain(name=name):
            return name
        case BuiltInType(field=field):
            return resolve_field_type(field.field_type, field_length(field))
    raise TypeError(f"Unsupported field reference: {ref!r}")
