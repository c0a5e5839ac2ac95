"""Probe for process lifecycle events.

Reports startup, shutdown and configuration problems that an operator
should see once per process rather than once per request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StartupProbe(Protocol):
    """Lifecycle events emitted from the application lifespan."""

    def application_started(self, app_name: str, environment: str, backend: str) -> None:
        """Record that the application finished starting."""
        ...

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        ...

    def insecure_jwt_secret_in_use(self, environment: str) -> None:
        """Record that session tokens are signed with the built-in fallback secret."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """StartupProbe writing structlog events."""

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

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def application_started(self, app_name: str, environment: str, backend: str) -> None:
        """Record that the application finished starting."""
        self._logger.info(
            "application_started",
            app_name=app_name,
            environment=environment,
            storage_backend=backend,
            **self._get_context_kwargs(),
        )

    def application_stopped(self) -> None:
        """Record that the application shut down."""
        self._logger.info("application_stopped", **self._get_context_kwargs())

    def insecure_jwt_secret_in_use(self, environment: str) -> None:
        """Record that session tokens are signed with the built-in fallback secret."""
        self._logger.warning(
            "insecure_jwt_secret_in_use",
            environment=environment,
            hint="Set LINKBIO_AUTH_JWT_SECRET to a long random value",
            **self._get_context_kwargs(),
        )
