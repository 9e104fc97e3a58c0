"""Domain-specific exception classes for the rate desk."""


class RateDeskError(Exception):
    """Base class for all rate desk errors."""


class DataStoreError(RateDeskError):
    """Raised when a datastore read or write fails.

    Attributes:
        operation: The repository operation that failed.
    """

    def __init__(self, operation: str, detail: str) -> None:
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation} failed: {detail}")


class RecordValidationError(DataStoreError):
    """Raised when a persisted row does not match its expected schema.

    Attributes:
        table: The table the row was read from.
        row_id: The row's identifier, if it could be read.
    """

    def __init__(self, table: str, row_id: str | None, detail: str) -> None:
        self.table = table
        self.row_id = row_id
        super().__init__(f"load {table} row {row_id!r}", detail)


class ProposalError(RateDeskError):
    """Raised when a proposal operation is invalid."""


class SeedError(RateDeskError):
    """Raised when a seed file is missing or malformed."""
