"""SQL construction, validation and safety utilities."""

from pg_dataops.sql.builder import (
    ReturningSpec,
    SQLBuilder,
    Statement,
    build_count,
    build_delete,
    build_insert,
    build_select,
    build_update,
    check_record_batch,
)
from pg_dataops.sql.conditions import (
    CompiledConditions,
    ConditionValue,
    ListValue,
    NullValue,
    ScalarValue,
    WildcardValue,
    classify_value,
    compile_conditions,
)
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.sql.identifiers import is_valid_identifier, validate_identifier
from pg_dataops.sql.parser import statement_kind

__all__ = [
    "CompiledConditions",
    "ConditionValue",
    "DEFAULT_POLICY",
    "ListValue",
    "NullValue",
    "ReturningSpec",
    "SQLBuilder",
    "SafetyPolicy",
    "ScalarValue",
    "Statement",
    "WildcardValue",
    "build_count",
    "build_delete",
    "build_insert",
    "build_select",
    "build_update",
    "check_record_batch",
    "classify_value",
    "compile_conditions",
    "is_valid_identifier",
    "statement_kind",
    "validate_identifier",
]
