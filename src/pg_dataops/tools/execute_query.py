"""Free-form parameterized SQL execution behind textual safety screening."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any

from pg_dataops.db.connection import DatabaseHandle, Row
from pg_dataops.errors import DataOpsError, DriverError
from pg_dataops.models.params import ExecuteQueryParams
from pg_dataops.results import coerce_rows, now_iso
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.sql.parser import statement_kind
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)

logger = logging.getLogger(__name__)


async def _explain(
    db: DatabaseHandle, query: str, query_params: Sequence[Any], *, analyze: bool
) -> list[Row] | None:
    # ANALYZE executes the statement, so it is limited to reads.
    options = "FORMAT JSON, ANALYZE, BUFFERS" if analyze else "FORMAT JSON"
    try:
        return await db.execute(f"EXPLAIN ({options}) {query}", query_params)
    except DriverError as exc:
        logger.warning("Failed to get execution plan: %s", exc)
        return None


async def execute_query(
    db: DatabaseHandle,
    raw_params: Mapping[str, Any] | None,
    *,
    policy: SafetyPolicy = DEFAULT_POLICY,
) -> ToolResponse:
    try:
        params = parse_params(ExecuteQueryParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("execute SQL query", state)

        policy.check_free_form(params.query)
        query_type = statement_kind(params.query)

        started = time.perf_counter()
        plan = None
        if params.explain:
            plan = await _explain(
                db, params.query, params.params, analyze=query_type == "SELECT"
            )
        result = await db.execute_modification(params.query, params.params)
        elapsed_ms = round((time.perf_counter() - started) * 1000)

        rows = coerce_rows(result.rows)
        response: ToolResponse = {
            "success": True,
            "query_type": query_type,
            "execution_time_ms": elapsed_ms,
            "row_count": len(rows),
            "affected_count": result.affected_count,
            "data": rows,
        }
        if plan is not None:
            response["execution_plan"] = plan
        response["executed_at"] = now_iso()

        logger.debug("Query executed: %d rows in %dms", len(rows), elapsed_ms)
        return response
    except DataOpsError as exc:
        return error_response("execute query", exc)
