"""Read-only schema and table introspection."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pg_dataops.db.connection import DatabaseHandle, Row
from pg_dataops.db.queries import (
    SCHEMA_COLUMNS_QUERY,
    SCHEMA_CONSTRAINTS_QUERY,
    SCHEMA_TABLES_QUERY,
    TABLE_COLUMNS_QUERY,
    TABLE_CONSTRAINTS_QUERY,
    TABLE_INDEXES_QUERY,
    TABLE_QUERY,
    TABLE_SIZE_QUERY,
)
from pg_dataops.errors import DriverError, TableNotFound

logger = logging.getLogger(__name__)


@dataclass
class TableSummary:
    table_name: str
    table_schema: str
    table_type: str
    columns: list[Row] = field(default_factory=list)
    constraints: list[Row] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "table_name": self.table_name,
            "table_schema": self.table_schema,
            "table_type": self.table_type,
            "columns": self.columns,
            "constraints": self.constraints,
        }


@dataclass(frozen=True)
class TableStatistics:
    estimated_row_count: int
    table_size_bytes: int
    table_size_pretty: str
    index_size_bytes: int
    index_size_pretty: str
    total_size_bytes: int
    total_size_pretty: str

    @classmethod
    def from_row(cls, row: Row) -> TableStatistics:
        return cls(
            estimated_row_count=int(row.get("estimated_row_count") or 0),
            table_size_bytes=int(row.get("table_size_bytes") or 0),
            table_size_pretty=str(row.get("table_size_pretty")),
            index_size_bytes=int(row.get("index_size_bytes") or 0),
            index_size_pretty=str(row.get("index_size_pretty")),
            total_size_bytes=int(row.get("total_size_bytes") or 0),
            total_size_pretty=str(row.get("total_size_pretty")),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "estimated_row_count": self.estimated_row_count,
            "table_size_bytes": self.table_size_bytes,
            "table_size_pretty": self.table_size_pretty,
            "index_size_bytes": self.index_size_bytes,
            "index_size_pretty": self.index_size_pretty,
            "total_size_bytes": self.total_size_bytes,
            "total_size_pretty": self.total_size_pretty,
        }


@dataclass
class TableDetails:
    table: Row
    columns: list[Row] = field(default_factory=list)
    constraints: list[Row] = field(default_factory=list)
    indexes: list[Row] = field(default_factory=list)
    statistics: TableStatistics | None = None

    def to_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "table": self.table,
            "columns": self.columns,
            "constraints": self.constraints,
            "indexes": self.indexes,
        }
        if self.statistics is not None:
            payload["statistics"] = self.statistics.to_dict()
        return payload


def _group_by_table(rows: list[Row]) -> dict[str, list[Row]]:
    grouped: dict[str, list[Row]] = {}
    for row in rows:
        entry = dict(row)
        table_name = entry.pop("table_name")
        entry.pop("ordinal_position", None)
        grouped.setdefault(table_name, []).append(entry)
    return grouped


async def introspect_schema(
    db: DatabaseHandle,
    schema_name: str,
    *,
    table_pattern: str | None = None,
    include_columns: bool = True,
    include_constraints: bool = False,
) -> list[TableSummary]:
    """List the tables of ``schema_name`` with optional column/constraint detail."""
    tables_query = SCHEMA_TABLES_QUERY.strip()
    params: list[object] = [schema_name]
    if table_pattern:
        tables_query += " AND table_name LIKE $2"
        params.append(table_pattern)
    tables_query += " ORDER BY table_name"

    logger.debug("Fetching schema information for schema: %s", schema_name)
    tables = [
        TableSummary(
            table_name=row["table_name"],
            table_schema=row["table_schema"],
            table_type=row["table_type"],
        )
        for row in await db.execute(tables_query, params)
    ]
    if not tables:
        return tables

    if include_columns:
        columns = _group_by_table(await db.execute(SCHEMA_COLUMNS_QUERY, [schema_name]))
        for table in tables:
            table.columns = columns.get(table.table_name, [])

    if include_constraints:
        constraints = _group_by_table(
            await db.execute(SCHEMA_CONSTRAINTS_QUERY, [schema_name])
        )
        for table in tables:
            table.constraints = constraints.get(table.table_name, [])

    return tables


async def describe_table(
    db: DatabaseHandle,
    schema_name: str,
    table: str,
    *,
    include_statistics: bool = True,
) -> TableDetails:
    """Collect columns, constraints, indexes and size statistics for one table."""
    params = [schema_name, table]
    table_rows = await db.execute(TABLE_QUERY, params)
    if not table_rows:
        raise TableNotFound(f"Table {schema_name}.{table} not found")

    details = TableDetails(
        table=table_rows[0],
        columns=await db.execute(TABLE_COLUMNS_QUERY, params),
        constraints=await db.execute(TABLE_CONSTRAINTS_QUERY, params),
        indexes=await db.execute(TABLE_INDEXES_QUERY, params),
    )

    if include_statistics:
        try:
            size_rows = await db.execute(TABLE_SIZE_QUERY, params)
        except DriverError as exc:
            logger.warning(
                "Statistics unavailable for %s.%s: %s", schema_name, table, exc
            )
        else:
            if size_rows:
                details.statistics = TableStatistics.from_row(size_rows[0])

    return details
