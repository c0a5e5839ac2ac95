"""Process-local storage used when PostgreSQL is unavailable.

Rows live in plain dictionaries keyed by table name and integer id, which
mirrors the relational layout closely enough that the in-memory
repositories can honour the same ownership and ordering rules as the SQL
ones. Nothing here survives a restart.
"""

from __future__ import annotations

import asyncio
import itertools
from collections import defaultdict
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

T = TypeVar("T")

Row = dict[str, Any]


class InMemoryDatabase:
    """Tables, id sequences and per-owner locks for the in-memory backend."""

    def __init__(self) -> None:
        self._tables: dict[str, dict[int, Row]] = defaultdict(dict)
        self._sequences: dict[str, itertools.count[int]] = {}
        self._owner_locks: dict[int, asyncio.Lock] = {}

    def table(self, name: str) -> dict[int, Row]:
        """Return the mutable row mapping for a table."""
        return self._tables[name]

    def next_id(self, name: str) -> int:
        """Allocate the next id for a table, starting at 1."""
        if name not in self._sequences:
            self._sequences[name] = itertools.count(1)
        return next(self._sequences[name])

    def owner_lock(self, owner_id: int) -> asyncio.Lock:
        lock = self._owner_locks.get(owner_id)
        if lock is None:
            lock = self._owner_locks[owner_id] = asyncio.Lock()
        return lock

    def clear(self) -> None:
        self._tables.clear()
        self._sequences.clear()
        self._owner_locks.clear()


class InMemoryTransactionManager:
    """Transaction manager for the in-memory backend.

    There is no rollback: every write is applied immediately. Owner
    transactions still serialize on a per-owner asyncio lock so concurrent
    reconciliations for one owner never interleave.
    """

    def __init__(self, database: InMemoryDatabase) -> None:
        self._database = database

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        yield

    @asynccontextmanager
    async def owner_transaction(self, owner_id: int) -> AsyncIterator[None]:
        async with self._database.owner_lock(owner_id):
            yield

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        yield

    async def read(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        return await fn()


@lru_cache
def get_memory_database() -> InMemoryDatabase:
    """Get the process-wide in-memory database."""
    return InMemoryDatabase()
