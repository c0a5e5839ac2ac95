"""Storage-level exceptions shared by every bounded context."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when a database connection cannot be established or is lost."""

    pass


class StorageUnavailableError(DatabaseError):
    """Raised when transient storage failures persist after all retries.

    The presentation layer maps this to a generic 500 response; the
    underlying cause is logged, never returned to the client.
    """

    def __init__(self, message: str, attempts: int | None = None):
        super().__init__(message)
        self.attempts = attempts


class TransactionError(DatabaseError):
    """Raised when transaction operations fail."""

    pass
