"""Facts gathered for one foreign key diagnosis."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PRODUCT_NAME = "Mautic"
PRODUCT_VERSION = "3.2.5"

Row = dict[str, Any]


class ConstraintDescriptor(BaseModel):
    """One column pair of a foreign key, joined with both columns' definitions.

    Field order matches the lookup query so serialized output keeps the
    catalog's column order.
    """

    referencing_table: str
    referencing_column: str
    referenced_table: str
    referenced_column: str
    constraint_type: str = Field(alias="CONSTRAINT_TYPE")
    referencing_data_type: str | None = None
    referencing_charset: str | None = None
    referencing_collation: str | None = None
    referencing_column_type: str | None = None
    referencing_is_nullable: str | None = None
    referencing_key: str | None = None
    referencing_default: str | None = None
    referencing_extra: str | None = None
    referenced_data_type: str | None = None
    referenced_charset: str | None = None
    referenced_collation: str | None = None
    referenced_column_type: str | None = None
    referenced_is_nullable: str | None = None
    referenced_key: str | None = None
    referenced_default: str | None = None
    referenced_extra: str | None = None
    schema_name: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def as_row(self) -> Row:
        """Dump with catalog column names (``CONSTRAINT_TYPE`` stays upper case)."""
        return self.model_dump(by_alias=True)


class TableFacts(BaseModel):
    """Everything fetched for one of the two related tables."""

    name: str
    structure: list[Row] = Field(default_factory=list)
    row_count: int = 0
    indexes: list[Row] = Field(default_factory=list)
    sample_rows: list[Row] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class DiagnosticContext(BaseModel):
    """Complete input for the remediation prompt. Built once per run."""

    error_message: str
    constraint_name: str
    constraint: list[ConstraintDescriptor] = Field(..., min_length=1)
    referencing: TableFacts
    referenced: TableFacts
    foreign_keys: list[Row] = Field(default_factory=list)
    constraints: list[Row] = Field(default_factory=list)
    database_version: str = ""
    product_name: str = PRODUCT_NAME
    product_version: str = PRODUCT_VERSION

    model_config = ConfigDict(frozen=True)
