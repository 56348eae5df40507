"""Typed parameter objects accepted by the tool entry points."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Record = dict[str, Any]


class _Params(BaseModel):
    model_config = ConfigDict(extra="forbid")


class Pagination(_Params):
    limit: int = Field(default=50, ge=1, le=1000)
    offset: int = Field(default=0, ge=0)


class Sort(_Params):
    column: str = Field(min_length=1)
    direction: Literal["ASC", "DESC"] = "ASC"


class QueryTableParams(_Params):
    table: str = Field(min_length=1)
    columns: list[str] | None = None
    where: Record | None = None
    pagination: Pagination | None = None
    sort: Sort | None = None


class InsertDataParams(_Params):
    table: str = Field(min_length=1)
    data: Record | list[Record]
    on_conflict: Literal["error", "ignore", "update"] = "error"
    conflict_columns: list[str] | None = None
    returning: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def records(self) -> list[Record]:
        return self.data if isinstance(self.data, list) else [self.data]


class UpdateDataParams(_Params):
    table: str = Field(min_length=1)
    data: Record
    where: Record
    returning: list[str] = Field(default_factory=lambda: ["*"])


class DeleteDataParams(_Params):
    table: str = Field(min_length=1)
    where: Record
    confirm_delete: bool = False
    returning: list[str] | None = None


class ExecuteQueryParams(_Params):
    query: str = Field(min_length=1)
    params: list[Any] = Field(default_factory=list)
    explain: bool = False


class GetSchemaParams(_Params):
    schema_name: str = "public"
    table_pattern: str | None = None
    include_columns: bool = True
    include_constraints: bool = False


class GetTableInfoParams(_Params):
    table: str = Field(min_length=1)
    schema_name: str = "public"
    include_statistics: bool = True


class ConnectionStatusParams(_Params):
    retry: bool = False
