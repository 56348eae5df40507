from __future__ import annotations

import re
from typing import Any

import pytest

from pg_dataops.db.connection import ConnectionState, ConnectionStatus, ModificationResult


def placeholder_numbers(sql: str) -> list[int]:
    return [int(number) for number in re.findall(r"\$(\d+)", sql)]


class FakeDatabase:
    """In-memory stand-in for the database handle that records every statement."""

    def __init__(
        self,
        *,
        status: ConnectionStatus = ConnectionStatus.CONNECTED,
        query_results: list[list[dict[str, Any]]] | None = None,
        modification_result: ModificationResult | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.state = ConnectionState(status=status)
        self.query_results = list(query_results or [])
        self.modification_result = modification_result or ModificationResult()
        self.errors = errors or {}
        self.calls: list[tuple[str, str, list[Any]]] = []
        self.retry_outcome = True

    def _maybe_fail(self, sql: str) -> None:
        for fragment, error in self.errors.items():
            if fragment in sql:
                raise error

    async def execute(self, sql: str, params=()) -> list[dict[str, Any]]:
        self.calls.append(("execute", sql, list(params)))
        self._maybe_fail(sql)
        if self.query_results:
            return self.query_results.pop(0)
        return []

    async def execute_modification(self, sql: str, params=()) -> ModificationResult:
        self.calls.append(("modify", sql, list(params)))
        self._maybe_fail(sql)
        return self.modification_result

    def connection_status(self) -> ConnectionState:
        return self.state

    async def retry_connection(self) -> bool:
        status = ConnectionStatus.CONNECTED if self.retry_outcome else ConnectionStatus.FAILED
        error = None if self.retry_outcome else "connection refused"
        self.state = ConnectionState(status=status, error=error)
        return self.retry_outcome

    @property
    def statements(self) -> list[str]:
        return [sql for _, sql, _ in self.calls]


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()
