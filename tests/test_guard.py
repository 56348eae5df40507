import pytest

from pg_dataops.errors import (
    ConfirmationRequired,
    DangerousStatementRejected,
    MissingWhereClause,
)
from pg_dataops.sql.guard import DEFAULT_POLICY, SafetyPolicy
from pg_dataops.sql.rules import DELETE_CONFIRMATION_THRESHOLD


class TestRequireWhere:
    @pytest.mark.parametrize("conditions", [None, {}])
    def test_rejects_empty_conditions(self, conditions):
        with pytest.raises(MissingWhereClause, match="DELETE"):
            DEFAULT_POLICY.require_where(conditions, "DELETE")

    def test_accepts_conditions(self):
        DEFAULT_POLICY.require_where({"id": 1}, "UPDATE")


class TestDeleteEstimate:
    def test_threshold_is_one_hundred(self):
        assert DELETE_CONFIRMATION_THRESHOLD == 100

    @pytest.mark.parametrize("count", [0, 1, 100])
    def test_at_or_below_threshold_passes(self, count):
        assert DEFAULT_POLICY.check_delete_estimate(count) == count

    def test_above_threshold_requires_confirmation(self):
        with pytest.raises(ConfirmationRequired) as excinfo:
            DEFAULT_POLICY.check_delete_estimate(150)
        assert excinfo.value.estimated_count == 150
        assert excinfo.value.details == {"estimated_count": 150}

    def test_threshold_is_configurable(self):
        strict = SafetyPolicy(delete_confirmation_threshold=5)
        with pytest.raises(ConfirmationRequired):
            strict.check_delete_estimate(6)


class TestFreeForm:
    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT * FROM users WHERE id = $1",
            "  select count(*) from orders",
            "DELETE FROM users WHERE id = $1",
            "delete from users\nwhere id = 1",
            "UPDATE users SET name = $1 WHERE id = $2",
            "WITH recent AS (SELECT 1) SELECT * FROM recent",
        ],
    )
    def test_allows_ordinary_statements(self, sql):
        DEFAULT_POLICY.check_free_form(sql)

    @pytest.mark.parametrize(
        "sql",
        [
            "DROP TABLE users",
            "drop   database app",
            "DROP SCHEMA public CASCADE",
            "TRUNCATE TABLE users",
            "ALTER TABLE users ADD COLUMN x int",
            "ALTER TABLE users DROP COLUMN email",
            "CREATE TABLE t (id int)",
            "INSERT INTO users (email) VALUES ($1)",
            "SELECT 1; DROP TABLE users",
        ],
    )
    def test_rejects_dangerous_patterns(self, sql):
        with pytest.raises(DangerousStatementRejected):
            DEFAULT_POLICY.check_free_form(sql)

    @pytest.mark.parametrize(
        "sql",
        ["DELETE FROM users", "  delete from users  ", "UPDATE users SET active = false"],
    )
    def test_rejects_unbounded_mutations(self, sql):
        with pytest.raises(MissingWhereClause):
            DEFAULT_POLICY.check_free_form(sql)

    def test_matches_inside_string_literals(self):
        # Textual screening: a literal mentioning a pattern is still rejected.
        with pytest.raises(DangerousStatementRejected):
            DEFAULT_POLICY.check_free_form("SELECT 'please drop table x' AS note")

    def test_custom_pattern_list(self):
        permissive = SafetyPolicy(dangerous_patterns=())
        permissive.check_free_form("INSERT INTO audit (msg) VALUES ($1)")
