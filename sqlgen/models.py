"""Pydantic models for catalog facts and generation results"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# Catalog Models
# ============================================================================


class ColumnDescriptor(BaseModel):
    """A column of a table as reported by the catalog"""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Column name")
    declared_type: str = Field(description="Column data type as declared in the catalog")


class PrimaryKeyInfo(BaseModel):
    """Primary key column of a table"""

    model_config = ConfigDict(frozen=True)

    column: str = Field(description="Constrained column name")
    is_auto_increment: bool = Field(default=False, description="Whether the database generates the value on insert")


class ForeignKeyEdge(BaseModel):
    """Directed edge: foreign_table.foreign_column references primary_table.primary_column"""

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Constraint name (may be missing on SQLite)")
    primary_table: str = Field(description="Referenced (parent) table")
    primary_column: str = Field(description="Referenced column")
    foreign_table: str = Field(description="Referencing (child) table")
    foreign_column: str = Field(description="Referencing column")


class TableSummary(BaseModel):
    """Summary of one base table for schema listings"""

    name: str = Field(description="Table name")
    primary_key: PrimaryKeyInfo | None = Field(default=None, description="Primary key, if any")
    columns: list[ColumnDescriptor] = Field(default_factory=list, description="Columns in declaration order")
    foreign_keys: list[ForeignKeyEdge] = Field(default_factory=list, description="Foreign keys owned by the table")


# ============================================================================
# Result Models
# ============================================================================

ScriptKind = Literal["procedures", "views"]
ErrorKind = Literal["validation", "connection", "metadata"]


class GenerationError(BaseModel):
    """Why a generation call failed"""

    kind: ErrorKind = Field(description="Failure category")
    detail: str = Field(description="Human readable failure description")


class GenerationResult(BaseModel):
    """Outcome of one generation call: either a script or an error"""

    kind: ScriptKind = Field(description="What was generated")
    success: bool = Field(description="Whether generation succeeded")
    script: str | None = Field(default=None, description="Generated SQL script on success")
    error: GenerationError | None = Field(default=None, description="Failure details")

    @classmethod
    def ok(cls, kind: ScriptKind, script: str) -> "GenerationResult":
        return cls(kind=kind, success=True, script=script)

    @classmethod
    def failed(cls, kind: ScriptKind, error_kind: ErrorKind, detail: str) -> "GenerationResult":
        return cls(kind=kind, success=False, error=GenerationError(kind=error_kind, detail=detail))
