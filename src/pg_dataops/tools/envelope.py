"""Uniform success/error payloads returned by every tool."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError

from pg_dataops.config import redact_dsn
from pg_dataops.db.connection import ConnectionState
from pg_dataops.errors import DataOpsError, InvalidParameters
from pg_dataops.results import now_iso

ToolResponse = dict[str, Any]
ParamsT = TypeVar("ParamsT", bound=BaseModel)

UNAVAILABLE_NEXT_STEPS = [
    "Use the 'connection-status' tool to check the connection details",
    "Use 'connection-status' with retry: true to attempt reconnection",
    "Verify your database configuration environment variables",
    "Ensure PostgreSQL server is running and accessible",
]


def parse_params(model: type[ParamsT], raw_params: Mapping[str, Any] | None) -> ParamsT:
    """Validate a raw payload, reporting every problem in one message."""
    try:
        return model.model_validate(dict(raw_params or {}))
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            field = ".".join(str(item) for item in err["loc"]) or "(root)"
            messages.append(f"{field}: {err['msg']}")
        raise InvalidParameters(
            "Invalid parameters: " + "; ".join(messages)
        ) from exc


def error_response(operation: str, error: DataOpsError) -> ToolResponse:
    payload: ToolResponse = {
        "error": f"Failed to {operation}",
        "error_type": error.error_type,
        "message": redact_dsn(str(error)),
        "timestamp": now_iso(),
    }
    if error.details:
        payload["details"] = error.details
    return payload


def unavailable_response(operation: str, state: ConnectionState) -> ToolResponse:
    return {
        "error": f"Cannot {operation}",
        "error_type": "DatabaseUnavailable",
        "message": "Database connection is not available",
        "connection_status": state.status.value,
        "connection_error": redact_dsn(state.error) if state.error else None,
        "last_attempt": state.last_attempt.isoformat() if state.last_attempt else None,
        "next_steps": list(UNAVAILABLE_NEXT_STEPS),
        "timestamp": now_iso(),
    }


def is_error(payload: Mapping[str, Any]) -> bool:
    return "error" in payload and "error_type" in payload


def json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, timedelta):
        return value.total_seconds()
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2, default=json_default)
