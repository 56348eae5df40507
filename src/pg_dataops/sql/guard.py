"""Pre-execution safety checks.

The checks live on :class:`SafetyPolicy` so they can be tightened or
swapped in tests without touching statement construction.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from pg_dataops.errors import (
    ConfirmationRequired,
    DangerousStatementRejected,
    MissingWhereClause,
)
from pg_dataops.sql.rules import (
    DANGEROUS_PATTERNS,
    DELETE_CONFIRMATION_THRESHOLD,
    UNBOUNDED_DELETE,
    UNBOUNDED_UPDATE,
    WHERE_TOKEN,
    DangerousPattern,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SafetyPolicy:
    """Stateless guard rules applied before any statement is issued."""

    delete_confirmation_threshold: int = DELETE_CONFIRMATION_THRESHOLD
    dangerous_patterns: tuple[DangerousPattern, ...] = DANGEROUS_PATTERNS

    def require_where(self, conditions: Mapping[str, Any] | None, operation: str) -> None:
        """Reject UPDATE/DELETE requests that carry no conditions."""
        if not conditions:
            logger.warning("Rejected %s without WHERE conditions", operation)
            raise MissingWhereClause(
                f"WHERE clause is required for {operation} operations for safety."
            )

    def check_delete_estimate(self, estimated_count: int) -> int:
        """Abort when a delete would exceed the confirmation threshold."""
        if estimated_count > self.delete_confirmation_threshold:
            logger.warning(
                "Delete aborted: %d rows exceed confirmation threshold %d",
                estimated_count,
                self.delete_confirmation_threshold,
            )
            raise ConfirmationRequired(estimated_count)
        return estimated_count

    def check_free_form(self, sql: str) -> None:
        """Best-effort textual screening of caller-supplied SQL."""
        folded = sql.strip().lower()

        if UNBOUNDED_DELETE.match(folded) and not WHERE_TOKEN.search(folded):
            logger.warning("Rejected free-form DELETE without WHERE")
            raise MissingWhereClause(
                "DELETE without WHERE clause is not allowed for safety."
            )
        if UNBOUNDED_UPDATE.match(folded) and not WHERE_TOKEN.search(folded):
            logger.warning("Rejected free-form UPDATE without WHERE")
            raise MissingWhereClause(
                "UPDATE without WHERE clause is not allowed for safety."
            )

        for rule in self.dangerous_patterns:
            if rule.matches(folded):
                logger.warning("Rejected free-form statement matching %s", rule.label)
                raise DangerousStatementRejected(
                    f"Potentially dangerous SQL operation detected ({rule.label}). "
                    "Query rejected for safety."
                )


DEFAULT_POLICY = SafetyPolicy()
