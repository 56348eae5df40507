"""Detailed description of a single table."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.db.introspect import describe_table
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import GetTableInfoParams
from pg_dataops.results import now_iso
from pg_dataops.sql.identifiers import validate_identifier
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)


async def get_table_info(
    db: DatabaseHandle, raw_params: Mapping[str, Any] | None
) -> ToolResponse:
    try:
        params = parse_params(GetTableInfoParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("get table information", state)

        table = validate_identifier(params.table)
        schema_name = validate_identifier(params.schema_name)
        details = await describe_table(
            db,
            schema_name,
            table,
            include_statistics=params.include_statistics,
        )
        return {**details.to_dict(), "generated_at": now_iso()}
    except DataOpsError as exc:
        return error_response("get table info", exc)
