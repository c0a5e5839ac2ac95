"""Retry policy for transient storage failures.

Connection resets, failovers and pool timeouts are retried with
exponential backoff. Anything else is a real error and propagates
immediately.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from infrastructure.database.exceptions import (
    DatabaseConnectionError,
    StorageUnavailableError,
)
from infrastructure.observability import DefaultStorageProbe, StorageProbe
from infrastructure.settings import StorageSettings

T = TypeVar("T")


def is_transient(error: BaseException) -> bool:
    """Whether an exception is worth retrying."""
    if isinstance(error, DBAPIError) and error.connection_invalidated:
        return True
    return isinstance(
        error,
        (
            OperationalError,
            InterfaceError,
            PoolTimeoutError,
            DatabaseConnectionError,
            OSError,
            asyncio.TimeoutError,
        ),
    )


async def run_with_retry(
    operation: str,
    fn: Callable[[], Awaitable[T]],
    settings: StorageSettings,
    probe: StorageProbe | None = None,
    before_retry: Callable[[], Awaitable[None]] | None = None,
) -> T:
    """Run ``fn`` and retry it while it fails transiently.

    Args:
        operation: Name used in log events
        fn: Zero-argument coroutine factory to run
        settings: Attempt count and backoff ceiling
        probe: Storage probe for retry events
        before_retry: Cleanup to run before each new attempt (e.g. rollback)

    Returns:
        Whatever ``fn`` returns

    Raises:
        StorageUnavailableError: If every attempt failed transiently
    """
    probe = probe or DefaultStorageProbe()

    async def _before_sleep(state: RetryCallState) -> None:
        error = state.outcome.exception() if state.outcome else None
        probe.transient_failure(
            operation=operation,
            attempt=state.attempt_number,
            error=str(error),
        )
        if before_retry is not None:
            await before_retry()

    retrying = AsyncRetrying(
        reraise=True,
        stop=stop_after_attempt(settings.retry_attempts),
        wait=wait_exponential(multiplier=0.1, max=settings.retry_max_wait_seconds),
        retry=retry_if_exception(is_transient),
        before_sleep=_before_sleep,
    )

    try:
        async for attempt in retrying:
            with attempt:
                return await fn()
    except Exception as e:
        if not is_transient(e):
            raise
        probe.retries_exhausted(
            operation=operation,
            attempts=settings.retry_attempts,
            error=str(e),
        )
        raise StorageUnavailableError(
            f"Storage unavailable during {operation}",
            attempts=settings.retry_attempts,
        ) from e

    raise AssertionError("unreachable")  # pragma: no cover
