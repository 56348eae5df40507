"""UPDATE with mandatory WHERE conditions."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import UpdateDataParams
from pg_dataops.results import modification_rows, now_iso
from pg_dataops.sql.builder import ReturningSpec, build_update
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)

logger = logging.getLogger(__name__)


async def update_data(
    db: DatabaseHandle,
    raw_params: Mapping[str, Any] | None,
    *,
    policy: SafetyPolicy = DEFAULT_POLICY,
) -> ToolResponse:
    try:
        params = parse_params(UpdateDataParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("update data", state)

        returning = ReturningSpec.from_request(params.returning)
        statement = build_update(
            params.table,
            params.data,
            params.where,
            returning=returning,
            policy=policy,
        )

        logger.debug("Executing update on %s", params.table)
        result = await db.execute_modification(statement.sql, statement.params)

        return {
            "table": params.table,
            "updated_count": result.affected_count,
            "data": modification_rows(result, returning),
            "updated_at": now_iso(),
        }
    except DataOpsError as exc:
        return error_response("update data", exc)
