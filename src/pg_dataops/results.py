"""Reshape driver output into caller-facing response fields."""

from __future__ import annotations

import math
import re
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from pg_dataops.db.connection import ModificationResult, Row
from pg_dataops.models.params import Pagination
from pg_dataops.sql.builder import ReturningSpec

# ASCII digits only; other Unicode decimal digits stay text.
_NUMERIC = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def now_iso() -> str:
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds")


def modification_rows(
    result: ModificationResult, returning: ReturningSpec | None
) -> list[Row]:
    """Rows to report for a mutating statement.

    An explicitly empty returning spec yields one empty record per affected
    row so the array length still equals the affected count.
    """
    if returning is not None and returning.is_empty:
        return [{} for _ in range(result.affected_count)]
    return list(result.rows)


def coerce_numeric(value: Any) -> Any:
    """Replace strings that fully parse as finite decimal numbers.

    Numeric-looking text such as zip codes is converted as well; callers that
    need the original text should use the structured query tool instead.
    """
    if not isinstance(value, str):
        return value
    candidate = value.strip()
    if not _NUMERIC.fullmatch(candidate):
        return value
    if _INTEGER.fullmatch(candidate):
        return int(candidate)
    number = float(candidate)
    return number if math.isfinite(number) else value


def coerce_rows(rows: Iterable[Row]) -> list[Row]:
    return [{key: coerce_numeric(value) for key, value in row.items()} for row in rows]


def pagination_block(pagination: Pagination, total: int) -> dict[str, object]:
    return {
        "total": total,
        "limit": pagination.limit,
        "offset": pagination.offset,
        "hasMore": pagination.offset + pagination.limit < total,
    }


def count_from_rows(rows: list[Row], column: str = "total") -> int:
    """Read the single COUNT(*) value returned by a count statement."""
    if not rows:
        return 0
    return int(rows[0][column])
