"""Single and multi-row INSERT with conflict handling."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import InsertDataParams
from pg_dataops.results import modification_rows, now_iso
from pg_dataops.sql.builder import ReturningSpec, build_insert
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)

logger = logging.getLogger(__name__)


async def insert_data(
    db: DatabaseHandle, raw_params: Mapping[str, Any] | None
) -> ToolResponse:
    try:
        params = parse_params(InsertDataParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("insert data", state)

        records = params.records
        returning = ReturningSpec.from_request(params.returning)
        statement = build_insert(
            params.table,
            records,
            on_conflict=params.on_conflict,
            conflict_columns=params.conflict_columns,
            returning=returning,
        )

        logger.debug("Executing insert with %d records", len(records))
        result = await db.execute_modification(statement.sql, statement.params)

        return {
            "table": params.table,
            "inserted_count": result.affected_count,
            "records_provided": len(records),
            "on_conflict_action": params.on_conflict,
            "data": modification_rows(result, returning),
            "inserted_at": now_iso(),
        }
    except DataOpsError as exc:
        return error_response("insert data", exc)
