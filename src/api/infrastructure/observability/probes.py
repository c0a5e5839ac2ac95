"""Domain probes for storage infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StorageProbe(Protocol):
    """Domain probe for storage availability and engine lifecycle.

    This probe captures domain-significant events related to the database
    and the in-memory fallback without exposing logging implementation details.
    """

    def engine_created(self, host: str, database: str) -> None:
        """Record that the database engine was created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the database engine and its pool were closed."""
        ...

    def database_unreachable(self, error: str) -> None:
        """Record that the database health check failed."""
        ...

    def database_recovered(self) -> None:
        """Record that the database became reachable again."""
        ...

    def fallback_engaged(self) -> None:
        """Record that requests are served by the in-memory store."""
        ...

    def transient_failure(self, operation: str, attempt: int, error: str) -> None:
        """Record a transient storage failure that will be retried."""
        ...

    def retries_exhausted(self, operation: str, attempts: int, error: str) -> None:
        """Record that a storage operation failed after all retries."""
        ...

    def with_context(self, context: ObservationContext) -> StorageProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStorageProbe:
    """Default implementation of StorageProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStorageProbe:
        """Create a new probe with observation context bound."""
        return DefaultStorageProbe(logger=self._logger, context=context)

    def engine_created(self, host: str, database: str) -> None:
        """Record that the database engine was created."""
        self._logger.info(
            "database_engine_created",
            host=host,
            database=database,
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        """Record that the database engine and its pool were closed."""
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )

    def database_unreachable(self, error: str) -> None:
        """Record that the database health check failed."""
        self._logger.error(
            "database_unreachable",
            error=error,
            **self._get_context_kwargs(),
        )

    def database_recovered(self) -> None:
        """Record that the database became reachable again."""
        self._logger.info(
            "database_recovered",
            **self._get_context_kwargs(),
        )

    def fallback_engaged(self) -> None:
        """Record that requests are served by the in-memory store."""
        self._logger.warning(
            "storage_fallback_engaged",
            backend="memory",
            **self._get_context_kwargs(),
        )

    def transient_failure(self, operation: str, attempt: int, error: str) -> None:
        """Record a transient storage failure that will be retried."""
        self._logger.warning(
            "storage_transient_failure",
            operation=operation,
            attempt=attempt,
            error=error,
            **self._get_context_kwargs(),
        )

    def retries_exhausted(self, operation: str, attempts: int, error: str) -> None:
        """Record that a storage operation failed after all retries."""
        self._logger.error(
            "storage_retries_exhausted",
            operation=operation,
            attempts=attempts,
            error=error,
            **self._get_context_kwargs(),
        )
