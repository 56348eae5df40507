"""Error taxonomy shared by the SQL core and the tool entry points."""

from __future__ import annotations


class DataOpsError(RuntimeError):
    """Base class for failures reported back to the caller as envelopes."""

    error_type = "DataOpsError"

    @property
    def details(self) -> dict[str, object]:
        return {}


class InvalidParameters(DataOpsError):
    """Raised when a tool payload does not match its parameter model."""

    error_type = "InvalidParameters"


class InvalidIdentifier(DataOpsError):
    """Raised when a table, column or schema name is not a safe identifier."""

    error_type = "InvalidIdentifier"

    def __init__(self, identifier: object) -> None:
        super().__init__(f"Invalid identifier: {identifier}")
        self.identifier = identifier


class MissingWhereClause(DataOpsError):
    """Raised when a mutating statement would run without a WHERE clause."""

    error_type = "MissingWhereClause"


class NoDataProvided(DataOpsError):
    """Raised when an insert or update payload carries no values."""

    error_type = "NoDataProvided"


class InconsistentBatchColumns(DataOpsError):
    """Raised when a record batch does not share the first record's keys."""

    error_type = "InconsistentBatchColumns"

    def __init__(self, index: int) -> None:
        super().__init__(
            f"Record at index {index} has different columns than the first record."
        )
        self.index = index

    @property
    def details(self) -> dict[str, object]:
        return {"record_index": self.index}


class ConfirmationRequired(DataOpsError):
    """Raised when a delete would affect more rows than the confirmation threshold."""

    error_type = "ConfirmationRequired"

    def __init__(self, estimated_count: int) -> None:
        super().__init__(
            f"This operation would delete {estimated_count} rows. "
            "If you're sure you want to proceed, set confirm_delete to true."
        )
        self.estimated_count = estimated_count

    @property
    def details(self) -> dict[str, object]:
        return {"estimated_count": self.estimated_count}


class DangerousStatementRejected(DataOpsError):
    """Raised when free-form SQL matches the dangerous-statement list."""

    error_type = "DangerousStatementRejected"


class DatabaseUnavailable(DataOpsError):
    """Raised when the database is not connected."""

    error_type = "DatabaseUnavailable"


class DriverError(DataOpsError):
    """Raised when the database driver reports a failure while executing SQL."""

    error_type = "DriverError"


class TableNotFound(DataOpsError):
    """Raised when an introspected table does not exist."""

    error_type = "TableNotFound"
