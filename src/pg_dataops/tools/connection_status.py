"""Report, and optionally re-probe, database connectivity."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pg_dataops.db.connection import ConnectionState, ConnectionStatus, DatabaseHandle
from pg_dataops.errors import DataOpsError
from pg_dataops.models.params import ConnectionStatusParams
from pg_dataops.tools.envelope import ToolResponse, error_response, parse_params

logger = logging.getLogger(__name__)

COMMON_ISSUES = [
    "Check if PostgreSQL server is running",
    "Verify DATABASE_URL environment variable is correct",
    "Ensure database credentials are valid",
    "Check network connectivity to database server",
    "Verify firewall settings allow database connections",
]

NEXT_STEPS = [
    "Review your database configuration environment variables",
    "Test connection manually with psql or database client",
    "Check database server logs for connection errors",
    "Use connection-status tool with retry: true to attempt reconnection",
]


def _troubleshooting() -> dict[str, list[str]]:
    return {"common_issues": list(COMMON_ISSUES), "next_steps": list(NEXT_STEPS)}


def _last_attempt(state: ConnectionState) -> str | None:
    return state.last_attempt.isoformat() if state.last_attempt else None


def _status_message(state: ConnectionState) -> str:
    if state.status is ConnectionStatus.CONNECTED:
        return "Database connection is healthy"
    if state.status is ConnectionStatus.FAILED:
        return f"Database connection failed: {state.error}"
    return "Database connection status unknown - no connection attempt made yet"


async def connection_status(
    db: DatabaseHandle, raw_params: Mapping[str, Any] | None
) -> ToolResponse:
    try:
        params = parse_params(ConnectionStatusParams, raw_params)
        logger.debug("Connection status requested with retry=%s", params.retry)

        if params.retry:
            retry_successful = await db.retry_connection()
            state = db.connection_status()
            return {
                "action": "retry_attempted",
                "connection_status": state.status.value,
                "retry_successful": retry_successful,
                "error": state.error,
                "last_attempt": _last_attempt(state),
                "message": (
                    "Database connection retry successful"
                    if retry_successful
                    else f"Database connection retry failed: {state.error}"
                ),
                "troubleshooting": None if retry_successful else _troubleshooting(),
            }

        state = db.connection_status()
        return {
            "connection_status": state.status.value,
            "error": state.error,
            "last_attempt": _last_attempt(state),
            "message": _status_message(state),
            "retry_available": True,
            "troubleshooting": (
                _troubleshooting() if state.status is ConnectionStatus.FAILED else None
            ),
        }
    except DataOpsError as exc:
        return error_response("check connection status", exc)
