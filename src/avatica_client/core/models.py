"""Result models for the Avatica client.

Pydantic models for column metadata and the canonical ResultSet every
query, execute, batch and metadata call resolves to.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# update_count value the server uses for row-returning statements.
QUERY_UPDATE_COUNT = -1


class ColumnMeta(BaseModel):
    """Metadata for a single result column, flattened from an Avatica signature."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    ordinal: int = 0
    name: str = Field(default="", alias="columnName")
    label: str | None = None
    type_id: int | None = None
    type_name: str | None = None
    rep: str | None = None
    nullable: int | None = None
    precision: int | None = None
    scale: int | None = None
    table_name: str | None = Field(default=None, alias="tableName")
    schema_name: str | None = Field(default=None, alias="schemaName")
    catalog_name: str | None = Field(default=None, alias="catalogName")
    column_class_name: str | None = Field(default=None, alias="columnClassName")

    @model_validator(mode="before")
    @classmethod
    def flatten_type(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("type"), dict):
            data = dict(data)
            column_type = data.pop("type")
            data.setdefault("type_id", column_type.get("id"))
            data.setdefault("type_name", column_type.get("name"))
            data.setdefault("rep", column_type.get("rep"))
        return data


class ResultSet(BaseModel):
    """Result of a statement, metadata lookup or transaction call.

    update_count is -1 for row-returning statements, 0 for no-ops and the
    affected-row count otherwise. update_counts is only set for batches.
    """

    columns: list[ColumnMeta] = Field(default_factory=list)
    rows: list[list[Any]] = Field(default_factory=list)
    update_count: int = 0
    update_counts: list[int] | None = None

    @model_validator(mode="after")
    def rows_only_for_queries(self) -> ResultSet:
        if self.rows and self.update_count != QUERY_UPDATE_COUNT:
            msg = (
                f"rows are only allowed when update_count is {QUERY_UPDATE_COUNT}, "
                f"got {self.update_count}"
            )
            raise ValueError(msg)
        return self

    @classmethod
    def empty(cls) -> ResultSet:
        return cls(columns=[], rows=[], update_count=0)

    @classmethod
    def for_batch(cls, update_counts: list[int]) -> ResultSet:
        return cls(columns=[], rows=[], update_count=0, update_counts=update_counts)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def is_query(self) -> bool:
        return self.update_count == QUERY_UPDATE_COUNT
