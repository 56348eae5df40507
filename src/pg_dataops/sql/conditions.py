"""Compile column/value condition sets into parameterized WHERE fragments.

Caller-supplied values are classified exactly once into a closed set of
variants (:class:`NullValue`, :class:`ListValue`, :class:`WildcardValue`,
:class:`ScalarValue`). Fragment generation only ever looks at the variant.
Conditions are always joined with ``AND``; there is no ``OR`` composition.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pg_dataops.sql.identifiers import validate_identifier


@dataclass(frozen=True)
class NullValue:
    """Matches rows where the column IS NULL."""


@dataclass(frozen=True)
class ScalarValue:
    value: Any


@dataclass(frozen=True)
class ListValue:
    # An empty list compiles to ``IN ()`` and is left to the database.
    values: tuple[Any, ...]


@dataclass(frozen=True)
class WildcardValue:
    pattern: str


ConditionValue = NullValue | ScalarValue | ListValue | WildcardValue


def classify_value(value: Any) -> ConditionValue:
    """Decide the condition variant for a raw caller value."""
    if value is None:
        return NullValue()
    if isinstance(value, (list, tuple)):
        return ListValue(tuple(value))
    if isinstance(value, str) and "%" in value:
        return WildcardValue(value)
    return ScalarValue(value)


@dataclass(frozen=True)
class CompiledConditions:
    """A WHERE fragment (without the keyword) and its bound parameters."""

    sql: str
    params: list[Any] = field(default_factory=list)
    next_index: int = 1

    @property
    def is_empty(self) -> bool:
        return not self.sql


def _compile_one(
    column: str, condition: ConditionValue, index: int, params: list[Any]
) -> tuple[str, int]:
    if isinstance(condition, NullValue):
        return f"{column} IS NULL", index

    if isinstance(condition, ListValue):
        placeholders = []
        for item in condition.values:
            placeholders.append(f"${index}")
            params.append(item)
            index += 1
        return f"{column} IN ({', '.join(placeholders)})", index

    if isinstance(condition, WildcardValue):
        params.append(condition.pattern)
        return f"{column} LIKE ${index}", index + 1

    params.append(condition.value)
    return f"{column} = ${index}", index + 1


def compile_conditions(
    conditions: Mapping[str, Any] | None, start_index: int = 1
) -> CompiledConditions:
    """Compile ``conditions`` in iteration order starting at ``$start_index``.

    Every key is validated as an identifier before any SQL is produced, so an
    invalid key fails the whole compilation. An empty mapping compiles to an
    empty fragment; whether that is acceptable is the caller's decision.
    """
    if start_index < 1:
        raise ValueError("start_index must be >= 1.")

    fragments: list[str] = []
    params: list[Any] = []
    index = start_index
    for key, raw_value in (conditions or {}).items():
        column = validate_identifier(key)
        fragment, index = _compile_one(column, classify_value(raw_value), index, params)
        fragments.append(fragment)

    return CompiledConditions(
        sql=" AND ".join(fragments),
        params=params,
        next_index=index,
    )
