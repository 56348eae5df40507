"""Identifier validation for names embedded literally in SQL text."""

from __future__ import annotations

import re

from pg_dataops.errors import InvalidIdentifier

# PostgreSQL truncates identifiers beyond NAMEDATALEN - 1 bytes.
MAX_IDENTIFIER_LENGTH = 63

_IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_$]*")

ALL_COLUMNS = "*"


def is_valid_identifier(name: object) -> bool:
    return (
        isinstance(name, str)
        and len(name) <= MAX_IDENTIFIER_LENGTH
        and _IDENTIFIER.fullmatch(name) is not None
    )


def validate_identifier(name: object) -> str:
    """Return ``name`` unchanged if it is a safe identifier, else raise."""
    if isinstance(name, str) and is_valid_identifier(name):
        return name
    raise InvalidIdentifier(name)


def validate_identifiers(names: list[str] | tuple[str, ...]) -> list[str]:
    return [validate_identifier(name) for name in names]


def validate_column_list(names: list[str] | tuple[str, ...]) -> list[str]:
    """Validate a select/returning list where ``*`` is allowed verbatim."""
    return [
        name if name == ALL_COLUMNS else validate_identifier(name) for name in names
    ]
