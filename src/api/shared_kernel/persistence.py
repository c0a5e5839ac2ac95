"""Transaction boundary port shared by every bounded context.

Application services never talk to a database session directly. They
receive an ``ITransactionManager`` alongside their repositories and use it
to open transactions, serialize work per owner and isolate individual
writes. Both the PostgreSQL and the in-memory storage adapters implement it.
"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Awaitable, Callable, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class ITransactionManager(Protocol):
    """Unit-of-work boundary for a single request."""

    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction that commits on exit and rolls back on error."""
        ...

    def owner_transaction(self, owner_id: int) -> AbstractAsyncContextManager[None]:
        """Open a transaction holding the exclusive per-owner lock.

        Concurrent owner transactions for the same owner run one after
        another; different owners never wait on each other.
        """
        ...

    def savepoint(self) -> AbstractAsyncContextManager[None]:
        """Isolate one write inside the current transaction.

        An exception raised inside the block undoes only that write and
        propagates to the caller.
        """
        ...

    async def read(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        """Run a read-only operation, retrying transient storage failures.

        Args:
            operation: Name used when reporting retries
            fn: Zero-argument coroutine factory performing the reads

        Raises:
            StorageUnavailableError: If transient failures outlast the retries
        """
        ...
