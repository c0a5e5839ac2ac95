"""Database health gate used to pick the storage backend per request."""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from functools import lru_cache
from typing import Awaitable, Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from infrastructure.database.dependencies import get_engine
from infrastructure.database.exceptions import StorageUnavailableError
from infrastructure.database.retry import run_with_retry
from infrastructure.observability import DefaultStorageProbe, StorageProbe
from infrastructure.settings import (
    StorageBackend,
    StorageSettings,
    get_storage_settings,
)


async def ping_database() -> None:
    """Run ``SELECT 1`` on a pooled connection."""
    async with get_engine().connect() as conn:
        await conn.execute(text("SELECT 1"))


@dataclass(frozen=True)
class HealthStatus:
    """Result of the most recent health check."""

    backend: StorageBackend
    database_reachable: bool | None
    last_error: str | None = None


class DatabaseHealthGate:
    """Decides whether requests are served by PostgreSQL or by memory.

    With ``backend=auto`` the database is pinged (with retries) and the
    result is trusted for ``health_recheck_seconds``. While the database
    is unreachable requests go to the in-memory store; the first
    successful check afterwards routes them back to PostgreSQL.
    """

    def __init__(
        self,
        settings: StorageSettings | None = None,
        ping: Callable[[], Awaitable[None]] | None = None,
        probe: StorageProbe | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._settings = settings or get_storage_settings()
        self._ping = ping or ping_database
        self._probe = probe or DefaultStorageProbe()
        self._clock = clock
        self._lock = asyncio.Lock()
        self._available: bool | None = None
        self._checked_at: float | None = None
        self._last_error: str | None = None

    def _is_fresh(self) -> bool:
        if self._checked_at is None:
            return False
        return self._clock() - self._checked_at < self._settings.health_recheck_seconds

    async def use_database(self) -> bool:
        """Whether the current request should use PostgreSQL."""
        backend = self._settings.backend
        if backend == StorageBackend.POSTGRES:
            return True
        if backend == StorageBackend.MEMORY:
            return False

        if self._is_fresh():
            return bool(self._available)

        async with self._lock:
            if not self._is_fresh():
                await self.check()
        return bool(self._available)

    async def check(self) -> bool:
        """Ping the database now and record the outcome."""
        previous = self._available

        async def _timed_ping() -> None:
            await asyncio.wait_for(self._ping(), self._settings.ping_timeout_seconds)

        try:
            await run_with_retry(
                "health_check",
                _timed_ping,
                settings=self._settings,
                probe=self._probe,
            )
        except StorageUnavailableError as e:
            self._mark_unreachable(str(e.__cause__ or e), previous)
        except SQLAlchemyError as e:
            # Non-transient failures (bad credentials, missing database)
            self._mark_unreachable(str(e), previous)
        else:
            self._available = True
            self._last_error = None
            if previous is False:
                self._probe.database_recovered()
        finally:
            self._checked_at = self._clock()

        return self._available

    def _mark_unreachable(self, error: str, previous: bool | None) -> None:
        self._available = False
        self._last_error = error
        if previous is not False:
            self._probe.database_unreachable(error=error)
            self._probe.fallback_engaged()

    @property
    def status(self) -> HealthStatus:
        return HealthStatus(
            backend=self._settings.backend,
            database_reachable=self._available,
            last_error=self._last_error,
        )


@lru_cache
def get_health_gate() -> DatabaseHealthGate:
    """Get the process-wide health gate."""
    return DatabaseHealthGate()
