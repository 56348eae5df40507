"""Parameterized statement construction for SELECT/INSERT/UPDATE/DELETE.

All statements are assembled through :class:`SQLBuilder`, which owns the
positional parameter list. A placeholder is only ever produced by binding a
value, so ``$n`` numbering is contiguous from 1 and always matches the
parameter list.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from pg_dataops.errors import InconsistentBatchColumns, NoDataProvided
from pg_dataops.models.params import Pagination, Sort
from pg_dataops.sql.conditions import CompiledConditions, compile_conditions
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.sql.identifiers import (
    ALL_COLUMNS,
    validate_column_list,
    validate_identifier,
    validate_identifiers,
)

ConflictAction = Literal["error", "ignore", "update"]


@dataclass(frozen=True)
class Statement:
    sql: str
    params: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class ReturningSpec:
    """Columns a mutating statement reports back.

    ``columns == ("*",)`` returns every column; an empty tuple suppresses the
    RETURNING clause while the caller still gets one placeholder row per
    affected row.
    """

    columns: tuple[str, ...]

    @classmethod
    def all(cls) -> ReturningSpec:
        return cls((ALL_COLUMNS,))

    @classmethod
    def nothing(cls) -> ReturningSpec:
        return cls(())

    @classmethod
    def from_request(cls, columns: Sequence[str]) -> ReturningSpec:
        return cls(tuple(validate_column_list(list(columns))))

    @property
    def is_empty(self) -> bool:
        return not self.columns

    def clause(self) -> str | None:
        if self.is_empty:
            return None
        return f"RETURNING {', '.join(self.columns)}"


class SQLBuilder:
    """Accumulates clauses and their positional parameters."""

    def __init__(self) -> None:
        self._clauses: list[str] = []
        self._params: list[Any] = []

    @property
    def next_index(self) -> int:
        return len(self._params) + 1

    def bind(self, value: Any) -> str:
        self._params.append(value)
        return f"${len(self._params)}"

    def add(self, clause: str) -> SQLBuilder:
        self._clauses.append(clause)
        return self

    def add_where(self, conditions: Mapping[str, Any] | None) -> CompiledConditions:
        compiled = compile_conditions(conditions, self.next_index)
        if not compiled.is_empty:
            self._clauses.append(f"WHERE {compiled.sql}")
            self._params.extend(compiled.params)
        return compiled

    def add_returning(self, returning: ReturningSpec | None) -> SQLBuilder:
        clause = returning.clause() if returning is not None else None
        if clause:
            self._clauses.append(clause)
        return self

    def build(self) -> Statement:
        return Statement(sql=" ".join(self._clauses), params=list(self._params))


def _select_list(columns: Sequence[str] | None) -> str:
    if not columns:
        return ALL_COLUMNS
    return ", ".join(validate_identifiers(list(columns)))


def build_select(
    table: str,
    *,
    columns: Sequence[str] | None = None,
    where: Mapping[str, Any] | None = None,
    sort: Sort | None = None,
    pagination: Pagination | None = None,
) -> Statement:
    """SELECT with optional WHERE, ORDER BY and LIMIT/OFFSET (bound last)."""
    table_name = validate_identifier(table)
    builder = SQLBuilder().add(f"SELECT {_select_list(columns)} FROM {table_name}")
    builder.add_where(where)

    if sort is not None:
        builder.add(f"ORDER BY {validate_identifier(sort.column)} {sort.direction}")

    if pagination is not None:
        limit = builder.bind(pagination.limit)
        offset = builder.bind(pagination.offset)
        builder.add(f"LIMIT {limit} OFFSET {offset}")

    return builder.build()


def build_count(table: str, *, where: Mapping[str, Any] | None = None) -> Statement:
    """COUNT(*) over the same WHERE fragment a SELECT or DELETE would use."""
    table_name = validate_identifier(table)
    builder = SQLBuilder().add(f"SELECT COUNT(*) AS total FROM {table_name}")
    builder.add_where(where)
    return builder.build()


def check_record_batch(records: Sequence[Mapping[str, Any]]) -> list[str]:
    """Return the validated column order shared by every record in the batch."""
    if not records:
        raise NoDataProvided("No data provided for insertion.")

    columns = list(records[0].keys())
    if not columns:
        raise NoDataProvided("No columns found in data.")
    validated = validate_identifiers(columns)

    expected = set(columns)
    for index, record in enumerate(records[1:], start=1):
        if len(record) != len(columns) or set(record.keys()) != expected:
            raise InconsistentBatchColumns(index)
    return validated


def _conflict_clause(
    columns: list[str],
    action: ConflictAction,
    conflict_columns: Sequence[str] | None,
) -> str | None:
    if action == "error":
        return None

    targets = validate_identifiers(list(conflict_columns or []))
    clause = "ON CONFLICT"
    if targets:
        clause += f" ({', '.join(targets)})"

    if action == "ignore":
        return f"{clause} DO NOTHING"

    assignments = [
        f"{column} = EXCLUDED.{column}" for column in columns if column not in targets
    ]
    if not assignments:
        return f"{clause} DO NOTHING"
    return f"{clause} DO UPDATE SET {', '.join(assignments)}"


def build_insert(
    table: str,
    records: Sequence[Mapping[str, Any]],
    *,
    on_conflict: ConflictAction = "error",
    conflict_columns: Sequence[str] | None = None,
    returning: ReturningSpec | None = None,
) -> Statement:
    """Multi-row INSERT; column order comes from the first record."""
    table_name = validate_identifier(table)
    columns = check_record_batch(records)

    builder = SQLBuilder().add(f"INSERT INTO {table_name} ({', '.join(columns)})")
    rows: list[str] = []
    for record in records:
        placeholders = [builder.bind(record[column]) for column in columns]
        rows.append(f"({', '.join(placeholders)})")
    builder.add(f"VALUES {', '.join(rows)}")

    conflict = _conflict_clause(columns, on_conflict, conflict_columns)
    if conflict:
        builder.add(conflict)

    builder.add_returning(returning)
    return builder.build()


def build_update(
    table: str,
    data: Mapping[str, Any],
    where: Mapping[str, Any],
    *,
    returning: ReturningSpec | None = None,
    policy: SafetyPolicy = DEFAULT_POLICY,
) -> Statement:
    """UPDATE with SET parameters numbered ahead of the WHERE parameters."""
    table_name = validate_identifier(table)
    if not data:
        raise NoDataProvided("No data provided for update.")
    policy.require_where(where, "UPDATE")

    builder = SQLBuilder().add(f"UPDATE {table_name}")
    assignments = [
        f"{validate_identifier(column)} = {builder.bind(value)}"
        for column, value in data.items()
    ]
    builder.add(f"SET {', '.join(assignments)}")
    builder.add_where(where)
    builder.add_returning(returning)
    return builder.build()


def build_delete(
    table: str,
    where: Mapping[str, Any],
    *,
    returning: ReturningSpec | None = None,
    policy: SafetyPolicy = DEFAULT_POLICY,
) -> Statement:
    table_name = validate_identifier(table)
    policy.require_where(where, "DELETE")

    builder = SQLBuilder().add(f"DELETE FROM {table_name}")
    builder.add_where(where)
    builder.add_returning(returning)
    return builder.build()
