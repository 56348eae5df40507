import json
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID

import pytest

from pg_dataops.db.connection import ConnectionState, ConnectionStatus
from pg_dataops.errors import ConfirmationRequired, InvalidParameters, MissingWhereClause
from pg_dataops.models.params import DeleteDataParams, QueryTableParams
from pg_dataops.tools.envelope import (
    error_response,
    is_error,
    parse_params,
    to_json,
    unavailable_response,
)


def test_parse_params_applies_defaults():
    params = parse_params(DeleteDataParams, {"table": "users", "where": {"id": 1}})
    assert params.confirm_delete is False
    assert params.returning is None


def test_parse_params_reports_all_problems():
    with pytest.raises(InvalidParameters) as excinfo:
        parse_params(QueryTableParams, {"table": "", "pagination": {"limit": 5000}})
    message = str(excinfo.value)
    assert "table" in message
    assert "pagination.limit" in message


def test_parse_params_rejects_unknown_keys():
    with pytest.raises(InvalidParameters):
        parse_params(QueryTableParams, {"table": "users", "order": "id"})


def test_error_response_shape():
    payload = error_response("delete data", MissingWhereClause("WHERE clause is required"))
    assert payload["error"] == "Failed to delete data"
    assert payload["error_type"] == "MissingWhereClause"
    assert payload["message"] == "WHERE clause is required"
    assert "timestamp" in payload
    assert "details" not in payload
    assert is_error(payload)


def test_error_response_carries_details():
    payload = error_response("delete data", ConfirmationRequired(150))
    assert payload["details"] == {"estimated_count": 150}
    assert "150" in payload["message"]


def test_error_response_redacts_credentials():
    error = MissingWhereClause("failed for postgresql://app:s3cret@db:5432/app")
    payload = error_response("update data", error)
    assert "s3cret" not in payload["message"]
    assert "postgresql://app:***@db:5432/app" in payload["message"]


def test_unavailable_response():
    attempted = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    state = ConnectionState(
        status=ConnectionStatus.FAILED,
        error="could not connect to postgres://u:pw@host/db",
        last_attempt=attempted,
    )
    payload = unavailable_response("query table data", state)

    assert payload["error"] == "Cannot query table data"
    assert payload["error_type"] == "DatabaseUnavailable"
    assert payload["connection_status"] == "failed"
    assert "pw@" not in payload["connection_error"]
    assert payload["last_attempt"] == attempted.isoformat()
    assert payload["next_steps"]


def test_to_json_handles_driver_values():
    payload = {
        "when": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        "day": date(2024, 5, 1),
        "amount": Decimal("10.25"),
        "id": UUID("12345678-1234-5678-1234-567812345678"),
        "blob": b"\x01\xff",
    }
    decoded = json.loads(to_json(payload))
    assert decoded == {
        "when": "2024-05-01T12:00:00+00:00",
        "day": "2024-05-01",
        "amount": "10.25",
        "id": "12345678-1234-5678-1234-567812345678",
        "blob": "01ff",
    }


def test_to_json_rejects_unknown_objects():
    with pytest.raises(TypeError):
        to_json({"value": object()})
