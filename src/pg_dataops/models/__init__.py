"""Parameter models for the data operation tools."""

from pg_dataops.models.params import (
    ConnectionStatusParams,
    DeleteDataParams,
    ExecuteQueryParams,
    GetSchemaParams,
    GetTableInfoParams,
    InsertDataParams,
    Pagination,
    QueryTableParams,
    Record,
    Sort,
    UpdateDataParams,
)

__all__ = [
    "ConnectionStatusParams",
    "DeleteDataParams",
    "ExecuteQueryParams",
    "GetSchemaParams",
    "GetTableInfoParams",
    "InsertDataParams",
    "Pagination",
    "QueryTableParams",
    "Record",
    "Sort",
    "UpdateDataParams",
]
