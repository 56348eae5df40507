"""List the tables of a schema with their columns and constraints."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.db.introspect import introspect_schema
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import GetSchemaParams
from pg_dataops.results import now_iso
from pg_dataops.sql.identifiers import validate_identifier
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)


async def get_schema(
    db: DatabaseHandle, raw_params: Mapping[str, Any] | None
) -> ToolResponse:
    try:
        params = parse_params(GetSchemaParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("get database schema", state)

        schema_name = validate_identifier(params.schema_name)
        tables = await introspect_schema(
            db,
            schema_name,
            table_pattern=params.table_pattern,
            include_columns=params.include_columns,
            include_constraints=params.include_constraints,
        )
        return {
            "schema": schema_name,
            "table_count": len(tables),
            "tables": [table.to_dict() for table in tables],
            "generated_at": now_iso(),
        }
    except DataOpsError as exc:
        return error_response("get schema", exc)
