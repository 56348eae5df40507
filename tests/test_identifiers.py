import pytest

from pg_dataops.errors import InvalidIdentifier
from pg_dataops.sql.identifiers import (
    is_valid_identifier,
    validate_column_list,
    validate_identifier,
)


@pytest.mark.parametrize(
    "name",
    ["users", "_private", "Order_Items", "col$1", "a", "x" * 63, "t2"],
)
def test_valid_identifiers_are_returned_unchanged(name):
    assert validate_identifier(name) == name


@pytest.mark.parametrize(
    "name",
    [
        "",
        "1users",
        "user-name",
        "public.users",
        "first name",
        "x" * 64,
        "users; DROP TABLE users",
        "$col",
        "naïve",
        None,
        42,
    ],
)
def test_invalid_identifiers_are_rejected(name):
    assert not is_valid_identifier(name)
    with pytest.raises(InvalidIdentifier):
        validate_identifier(name)


def test_invalid_identifier_message_names_the_input():
    with pytest.raises(InvalidIdentifier, match="Invalid identifier: bad-name"):
        validate_identifier("bad-name")


def test_column_list_allows_star_verbatim():
    assert validate_column_list(["*", "id"]) == ["*", "id"]
    with pytest.raises(InvalidIdentifier):
        validate_column_list(["id", "name; --"])
