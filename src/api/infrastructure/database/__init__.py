"""Database infrastructure - shared connection primitives."""

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    StorageUnavailableError,
    TransactionError,
)

__all__ = [
    "DatabaseConnectionError",
    "DatabaseError",
    "StorageUnavailableError",
    "TransactionError",
]
