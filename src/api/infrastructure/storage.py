"""Per-request storage selection.

Context dependency modules build their repositories from a
``StorageHandle``. The handle carries either an AsyncSession or the
in-memory database, never both, together with the matching transaction
manager.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated, AsyncIterator

from fastapi import Depends

from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.dependencies import get_sessionmaker
from infrastructure.database.health import DatabaseHealthGate, get_health_gate
from infrastructure.database.transactions import SqlTransactionManager
from infrastructure.memory import (
    InMemoryDatabase,
    InMemoryTransactionManager,
    get_memory_database,
)
from infrastructure.settings import StorageBackend, get_storage_settings
from shared_kernel.persistence import ITransactionManager


@dataclass(frozen=True)
class StorageHandle:
    """Storage resources for one request."""

    backend: StorageBackend
    transactions: ITransactionManager
    session: AsyncSession | None = None
    memory: InMemoryDatabase | None = None

    @classmethod
    def for_session(cls, session: AsyncSession) -> StorageHandle:
        return cls(
            backend=StorageBackend.POSTGRES,
            transactions=SqlTransactionManager(session, get_storage_settings()),
            session=session,
        )

    @classmethod
    def for_memory(cls, database: InMemoryDatabase) -> StorageHandle:
        return cls(
            backend=StorageBackend.MEMORY,
            transactions=InMemoryTransactionManager(database),
            memory=database,
        )


async def get_storage(
    gate: Annotated[DatabaseHealthGate, Depends(get_health_gate)],
) -> AsyncIterator[StorageHandle]:
    """Provide the storage handle for a request (FastAPI dependency).

    The session, when one is opened, is closed after the response is sent;
    any transaction left open by a failed request is rolled back.
    """
    if await gate.use_database():
        async with get_sessionmaker()() as session:
            yield StorageHandle.for_session(session)
    else:
        yield StorageHandle.for_memory(get_memory_database())
