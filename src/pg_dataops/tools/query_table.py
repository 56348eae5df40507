"""Filtered, sorted and paginated SELECT over a single table."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import QueryTableParams
from pg_dataops.results import count_from_rows, now_iso, pagination_block
from pg_dataops.sql.builder import build_count, build_select
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)

logger = logging.getLogger(__name__)


async def query_table(
    db: DatabaseHandle, raw_params: Mapping[str, Any] | None
) -> ToolResponse:
    """Query rows from ``table``.

    When pagination is requested a second COUNT(*) statement with the same
    WHERE fragment computes the total used for ``hasMore``.
    """
    try:
        params = parse_params(QueryTableParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("query table data", state)

        statement = build_select(
            params.table,
            columns=params.columns,
            where=params.where,
            sort=params.sort,
            pagination=params.pagination,
        )
        logger.debug("Executing table query: %s", statement.sql)
        rows = await db.execute(statement.sql, statement.params)

        response: ToolResponse = {
            "table": params.table,
            "count": len(rows),
            "data": rows,
        }
        if params.pagination is not None:
            count = build_count(params.table, where=params.where)
            total = count_from_rows(await db.execute(count.sql, count.params))
            response["pagination"] = pagination_block(params.pagination, total)
        response["queried_at"] = now_iso()
        return response
    except DataOpsError as exc:
        return error_response("query table", exc)
