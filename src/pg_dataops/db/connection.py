"""PostgreSQL connection pool, statement execution and health checks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Protocol

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb
from psycopg_pool import AsyncConnectionPool

from pg_dataops.config import Settings, redact_dsn
from pg_dataops.errors import DriverError

logger = logging.getLogger(__name__)

Row = dict[str, Any]


class DatabaseConnectionError(RuntimeError):
    """Raised when a PostgreSQL connection or health check fails."""


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ConnectionState:
    """Outcome of the most recent connectivity probe."""

    status: ConnectionStatus = ConnectionStatus.UNKNOWN
    error: str | None = None
    last_attempt: datetime | None = None

    @property
    def is_connected(self) -> bool:
        return self.status is ConnectionStatus.CONNECTED


@dataclass(frozen=True)
class ModificationResult:
    rows: list[Row] = field(default_factory=list)
    affected_count: int = 0


@dataclass(frozen=True)
class HealthcheckResult:
    """Information returned by a successful PostgreSQL health check."""

    current_database: str
    current_user: str
    server_version: str


class DatabaseHandle(Protocol):
    """What the tool entry points need from the database layer."""

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> list[Row]: ...

    async def execute_modification(
        self, sql: str, params: Sequence[Any] = ()
    ) -> ModificationResult: ...

    def connection_status(self) -> ConnectionState: ...

    async def retry_connection(self) -> bool: ...


def adapt_params(params: Sequence[Any]) -> list[Any]:
    """Wrap JSON objects so psycopg sends them as jsonb."""
    return [Jsonb(value) if isinstance(value, dict) else value for value in params]


def _connection_kwargs(settings: Settings) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "autocommit": True,
        # Raw cursors use PostgreSQL's native $1, $2 placeholders.
        "cursor_factory": psycopg.AsyncRawCursor,
        "row_factory": dict_row,
        "connect_timeout": settings.connect_timeout,
    }
    if settings.query_timeout_ms:
        kwargs["options"] = f"-c statement_timeout={settings.query_timeout_ms}"
    return kwargs


class Database:
    """Pooled PostgreSQL access passed explicitly to every tool call."""

    def __init__(
        self, settings: Settings, pool: AsyncConnectionPool | None = None
    ) -> None:
        self._pool = pool or AsyncConnectionPool(
            settings.conninfo,
            min_size=1,
            max_size=settings.max_connections,
            kwargs=_connection_kwargs(settings),
            timeout=float(settings.connect_timeout),
            open=False,
        )
        self._state = ConnectionState()

    async def open(self) -> None:
        await self._pool.open()

    async def close(self) -> None:
        await self._pool.close()
        logger.debug("Database pool closed")

    async def __aenter__(self) -> Database:
        await self.open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def execute(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        """Run a statement and return its rows (empty when it returns none)."""
        logger.debug("Executing query: %s with %d params", sql, len(params))
        try:
            async with self._pool.connection() as conn:
                cursor = await conn.execute(sql, adapt_params(params))
                rows = await cursor.fetchall() if cursor.description else []
        except psycopg.Error as exc:
            logger.error("Database query error: %s", exc)
            raise DriverError(f"Database query failed: {exc}") from exc

        logger.debug("Query completed successfully, returned %d rows", len(rows))
        return rows

    async def execute_modification(
        self, sql: str, params: Sequence[Any] = ()
    ) -> ModificationResult:
        """Run INSERT/UPDATE/DELETE and report returned rows plus affected count."""
        logger.debug("Executing modification: %s with %d params", sql, len(params))
        try:
            async with self._pool.connection() as conn:
                cursor = await conn.execute(sql, adapt_params(params))
                rows = await cursor.fetchall() if cursor.description else []
                affected = max(cursor.rowcount, 0)
        except psycopg.Error as exc:
            logger.error("Database modification error: %s", exc)
            raise DriverError(f"Database modification failed: {exc}") from exc

        logger.debug(
            "Modification completed, affected %d rows, returned %d rows",
            affected,
            len(rows),
        )
        return ModificationResult(rows=rows, affected_count=affected)

    def connection_status(self) -> ConnectionState:
        return self._state

    async def test_connection(self) -> bool:
        """Probe connectivity with ``SELECT 1`` and record the outcome."""
        attempted_at = datetime.now(tz=UTC)
        try:
            rows = await self.execute("SELECT 1 AS test")
        except DriverError as exc:
            self._state = ConnectionState(
                status=ConnectionStatus.FAILED,
                error=redact_dsn(str(exc)),
                last_attempt=attempted_at,
            )
            logger.warning("Connection test failed: %s", self._state.error)
            return False

        if len(rows) == 1 and rows[0].get("test") == 1:
            self._state = ConnectionState(
                status=ConnectionStatus.CONNECTED, last_attempt=attempted_at
            )
            logger.debug("Database connection test successful")
            return True

        self._state = ConnectionState(
            status=ConnectionStatus.FAILED,
            error="Connection test query returned unexpected result",
            last_attempt=attempted_at,
        )
        return False

    async def retry_connection(self) -> bool:
        logger.info("Attempting to retry database connection")
        return await self.test_connection()

    async def healthcheck(self) -> HealthcheckResult:
        """Run a lightweight server identity check."""
        try:
            rows = await self.execute(
                """
                SELECT
                  current_database() AS current_database,
                  current_user AS current_user,
                  current_setting('server_version') AS server_version
                """
            )
        except DriverError as exc:
            raise DatabaseConnectionError(
                f"PostgreSQL health check failed: {redact_dsn(str(exc))}"
            ) from exc

        if not rows:
            raise DatabaseConnectionError("PostgreSQL health check returned no data.")

        row = rows[0]
        return HealthcheckResult(
            current_database=row["current_database"],
            current_user=row["current_user"],
            server_version=row["server_version"],
        )
