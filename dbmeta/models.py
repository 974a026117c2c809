"""Pydantic models for catalog objects and scripts"""

from enum import IntEnum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field

# ============================================================================
# Field Type Models
# ============================================================================


class FieldSpec(BaseModel):
    """Low-level type metadata of a catalog field (RDB$FIELDS)"""

    field_type: int = Field(description="Catalog field type code (RDB$FIELD_TYPE)")
    length: int = Field(default=0, description="Stored length in bytes (RDB$FIELD_LENGTH)")
    character_length: int | None = Field(default=None, description="Length in characters (RDB$CHARACTER_LENGTH)")
    precision: int | None = Field(default=None, description="Numeric precision (RDB$FIELD_PRECISION)")
    scale: int | None = Field(default=None, description="Numeric scale (RDB$FIELD_SCALE)")

    model_config = {"frozen": True}


class UserDomain(BaseModel):
    """Reference to a user-defined domain, rendered by name"""

    kind: Literal["domain"] = "domain"
    name: str = Field(description="Domain name")

    model_config = {"frozen": True}


class BuiltInType(BaseModel):
    """Reference to a system-generated domain, rendered from its field type"""

    kind: Literal["builtin"] = "builtin"
    field: FieldSpec = Field(description="Type metadata of the underlying field")

    model_config = {"frozen": True}


FieldRef = Annotated[UserDomain | BuiltInType, Field(discriminator="kind")]


# ============================================================================
# Catalog Object Models
# ============================================================================


class Domain(BaseModel):
    """A named, reusable column type definition"""

    name: str = Field(description="Domain name")
    sql_type: str = Field(description="Resolved SQL type declaration")


class Column(BaseModel):
    """A table column"""

    name: str = Field(description="Column name")
    position: int = Field(ge=0, description="Ordinal position within the table")
    field_ref: FieldRef = Field(description="Domain reference or built-in type")


class Table(BaseModel):
    """A user table with its columns in ordinal order"""

    name: str = Field(description="Table name")
    columns: list[Column] = Field(default_factory=list, description="Columns ordered by position")


class ParameterDirection(IntEnum):
    """Procedure parameter direction (RDB$PARAMETER_TYPE)"""

    INPUT = 0
    OUTPUT = 1


class ProcedureParameter(BaseModel):
    """An input or output parameter of a stored procedure"""

    name: str = Field(description="Parameter name")
    direction: ParameterDirection = Field(description="Input or output")
    position: int = Field(ge=0, description="Parameter number within its direction group")
    field_ref: FieldRef = Field(description="Domain reference or built-in type")


class Procedure(BaseModel):
    """A stored procedure with its parameters and body"""

    name: str = Field(description="Procedure name")
    input_parameters: list[ProcedureParameter] = Field(default_factory=list, description="Argument list")
    output_parameters: list[ProcedureParameter] = Field(default_factory=list, description="RETURNS list")
    source: str = Field(default="", description="Procedure body (BEGIN ... END)")


class CatalogSnapshot(BaseModel):
    """Everything read from the catalog during one export"""

    domains: list[Domain] = Field(default_factory=list)
    tables: list[Table] = Field(default_factory=list)
    procedures: list[Procedure] = Field(default_factory=list)


# ============================================================================
# Script Models
# ============================================================================


class Script(BaseModel):
    """The executable statements of one script file"""

    path: Path | None = Field(default=None, description="Source file, None for inline scripts")
    statements: list[str] = Field(default_factory=list, description="Statements in file order")
