"""PostgreSQL implementation of the transaction boundary port."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.retry import run_with_retry
from infrastructure.observability import DefaultStorageProbe, StorageProbe
from infrastructure.settings import StorageSettings, get_storage_settings

T = TypeVar("T")

# First key of the two-key advisory lock; keeps owner locks apart from any
# other advisory locks taken against the same database.
OWNER_LOCK_NAMESPACE = 7001


class SqlTransactionManager:
    """Transaction manager bound to one AsyncSession.

    Owner transactions take ``pg_advisory_xact_lock`` so that concurrent
    writes for the same owner are serialized by PostgreSQL. The lock is
    released automatically at commit or rollback.
    """

    def __init__(
        self,
        session: AsyncSession,
        settings: StorageSettings | None = None,
        probe: StorageProbe | None = None,
    ) -> None:
        self._session = session
        self._settings = settings or get_storage_settings()
        self._probe = probe or DefaultStorageProbe()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        async with self._session.begin():
            yield

    @asynccontextmanager
    async def owner_transaction(self, owner_id: int) -> AsyncIterator[None]:
        async with self._session.begin():
            await self._session.execute(
                text("SELECT pg_advisory_xact_lock(:namespace, :owner_id)"),
                {"namespace": OWNER_LOCK_NAMESPACE, "owner_id": owner_id},
            )
            yield

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        async with self._session.begin_nested():
            yield

    async def read(self, operation: str, fn: Callable[[], Awaitable[T]]) -> T:
        return await run_with_retry(
            operation,
            fn,
            settings=self._settings,
            probe=self._probe,
            before_retry=self._session.rollback,
        )
