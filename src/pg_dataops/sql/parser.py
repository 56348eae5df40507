"""Statement classification for free-form SQL, backed by SQLGlot."""

from __future__ import annotations

import logging
import re

from sqlglot import exp, parse_one
from sqlglot.errors import SqlglotError

logger = logging.getLogger(__name__)


def _optional_exp(name: str) -> type[exp.Expression] | None:
    candidate = getattr(exp, name, None)
    if isinstance(candidate, type) and issubclass(candidate, exp.Expression):
        return candidate
    return None


_KIND_NAMES = (
    ("Insert", "INSERT"),
    ("Update", "UPDATE"),
    ("Delete", "DELETE"),
    ("Create", "CREATE"),
    # sqlglot renamed this node in newer versions.
    ("Alter", "ALTER"),
    ("AlterTable", "ALTER"),
)

_STATEMENT_KINDS: tuple[tuple[type[exp.Expression], str], ...] = tuple(
    (statement_type, kind)
    for statement_type, kind in (
        (_optional_exp(name), kind) for name, kind in _KIND_NAMES
    )
    if statement_type is not None
)

_LEADING_KEYWORDS = ("INSERT", "UPDATE", "DELETE", "CREATE", "ALTER")
_DATA_MODIFYING_KINDS = ("INSERT", "UPDATE", "DELETE")
_DATA_MODIFYING_TYPES = tuple(
    statement_type
    for statement_type, kind in _STATEMENT_KINDS
    if kind in _DATA_MODIFYING_KINDS
)
_DATA_MODIFYING_WORD = re.compile(r"\b(insert|update|delete)\b", re.IGNORECASE)


def _keyword_kind(sql: str) -> str:
    folded = sql.strip().upper()
    for keyword in _LEADING_KEYWORDS:
        if folded.startswith(keyword):
            return keyword
    # Unparsed WITH ... may still wrap a data-modifying statement.
    nested = _DATA_MODIFYING_WORD.search(sql)
    if nested is not None:
        return nested.group(1).upper()
    return "SELECT"


def _node_kind(node: exp.Expression) -> str | None:
    for statement_type, kind in _STATEMENT_KINDS:
        if isinstance(node, statement_type):
            return kind
    return None


def statement_kind(sql: str) -> str:
    """Classify a statement as SELECT, INSERT, UPDATE, DELETE, CREATE or ALTER.

    The root statement decides the kind unless a data-modifying statement is
    nested inside it (``WITH u AS (UPDATE ...) SELECT ...``), in which case
    the outermost such statement does. Anything else reports as SELECT. SQL
    that SQLGlot cannot parse is classified by keywords instead.
    """
    normalized = sql.strip()
    if not normalized:
        return "SELECT"

    try:
        expression = parse_one(normalized, read="postgres")
    except SqlglotError as exc:
        logger.debug("Falling back to keyword classification: %s", exc)
        return _keyword_kind(normalized)

    kind = _node_kind(expression)
    if kind is not None:
        return kind
    nested = expression.find(*_DATA_MODIFYING_TYPES)
    if nested is not None:
        return _node_kind(nested) or "SELECT"
    return "SELECT"
