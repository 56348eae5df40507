"""DELETE with mandatory WHERE conditions and impact estimation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import DatabaseHandle
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import DeleteDataParams
from pg_dataops.results import count_from_rows, modification_rows, now_iso
from pg_dataops.sql.builder import ReturningSpec, build_count, build_delete
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.tools.envelope import (
    ToolResponse,
    error_response,
    parse_params,
    unavailable_response,
)

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = "No rows match the WHERE conditions"


async def delete_data(
    db: DatabaseHandle,
    raw_params: Mapping[str, Any] | None,
    *,
    policy: SafetyPolicy = DEFAULT_POLICY,
) -> ToolResponse:
    """Delete matching rows from ``table``.

    Unless ``confirm_delete`` is set, the matching rows are counted first and
    the DELETE is only issued when the count is between 1 and the policy's
    confirmation threshold. A zero count returns without issuing the DELETE.
    """
    try:
        params = parse_params(DeleteDataParams, raw_params)
        state = db.connection_status()
        if not state.is_connected:
            return unavailable_response("delete data", state)

        returning = (
            ReturningSpec.from_request(params.returning)
            if params.returning is not None
            else None
        )
        statement = build_delete(
            params.table, params.where, returning=returning, policy=policy
        )

        if not params.confirm_delete:
            estimate = build_count(params.table, where=params.where)
            estimated = policy.check_delete_estimate(
                count_from_rows(await db.execute(estimate.sql, estimate.params))
            )
            if estimated == 0:
                response: ToolResponse = {
                    "table": params.table,
                    "deleted_count": 0,
                    "message": NO_MATCH_MESSAGE,
                }
                if returning is not None:
                    response["data"] = []
                response["deleted_at"] = now_iso()
                return response

        logger.debug("Executing delete on %s", params.table)
        result = await db.execute_modification(statement.sql, statement.params)

        response = {"table": params.table, "deleted_count": result.affected_count}
        if returning is not None:
            response["data"] = modification_rows(result, returning)
        response["deleted_at"] = now_iso()
        return response
    except DataOpsError as exc:
        return error_response("delete data", exc)
