"""Database helpers for pg-dataops."""

from pg_dataops.db.connection import (
    ConnectionState,
    ConnectionStatus,
    Database,
    DatabaseConnectionError,
    DatabaseHandle,
    HealthcheckResult,
    ModificationResult,
)
from pg_dataops.db.introspect import (
    TableDetails,
    TableSummary,
    describe_table,
    introspect_schema,
)

__all__ = [
    "ConnectionState",
    "ConnectionStatus",
    "Database",
    "DatabaseConnectionError",
    "DatabaseHandle",
    "HealthcheckResult",
    "ModificationResult",
    "TableDetails",
    "TableSummary",
    "describe_table",
    "introspect_schema",
]
