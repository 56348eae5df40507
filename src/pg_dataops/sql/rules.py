"""SQL safety rules for structured and free-form execution."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class DangerousPattern:
    label: str
    pattern: re.Pattern[str]

    def matches(self, sql: str) -> bool:
        return self.pattern.search(sql) is not None


def _rule(label: str, regex: str) -> DangerousPattern:
    return DangerousPattern(label=label, pattern=re.compile(regex, re.IGNORECASE))


# Textual heuristics, not a parser: string literals containing these words
# are rejected too, and comment-split keywords slip through.
DANGEROUS_PATTERNS: tuple[DangerousPattern, ...] = (
    _rule("DROP TABLE", r"drop\s+table"),
    _rule("DROP DATABASE", r"drop\s+database"),
    _rule("DROP SCHEMA", r"drop\s+schema"),
    _rule("TRUNCATE TABLE", r"truncate\s+table"),
    _rule("ALTER TABLE ... DROP", r"alter\s+table.*drop"),
    _rule("ALTER TABLE ... ADD", r"alter\s+table.*add"),
    _rule("CREATE TABLE", r"create\s+table"),
    _rule("INSERT INTO", r"insert\s+into"),
)

UNBOUNDED_DELETE = re.compile(r"^delete\s+from\b")
UNBOUNDED_UPDATE = re.compile(r"^update\s.*\bset\b", re.DOTALL)
WHERE_TOKEN = re.compile(r"\bwhere\b")

DELETE_CONFIRMATION_THRESHOLD = 100
