"""Protocol for authentication service observability.

Defines the interface for domain probes that capture application-level
domain events for signup and login.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AuthServiceProbe(Protocol):
    """Domain probe for authentication service operations."""

    def user_signed_up(self, user_id: int, username: str) -> None:
        """Record that a new user registered."""
        ...

    def signup_rejected(self, username: str | None, reason: str) -> None:
        """Record that a signup attempt was refused."""
        ...

    def login_succeeded(self, user_id: int, username: str) -> None:
        """Record that a user logged in."""
        ...

    def login_failed(self, identifier: str, reason: str) -> None:
        """Record that a login attempt failed."""
        ...

    def with_context(self, context: ObservationContext) -> AuthServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAuthServiceProbe:
    """Default implementation of AuthServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAuthServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultAuthServiceProbe(logger=self._logger, context=context)

    def user_signed_up(self, user_id: int, username: str) -> None:
        """Record that a new user registered."""
        self._logger.info(
            "user_signed_up",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def signup_rejected(self, username: str | None, reason: str) -> None:
        """Record that a signup attempt was refused."""
        self._logger.info(
            "signup_rejected",
            username=username,
            reason=reason,
            **self._get_context_kwargs(),
        )

    def login_succeeded(self, user_id: int, username: str) -> None:
        """Record that a user logged in."""
        self._logger.info(
            "login_succeeded",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def login_failed(self, identifier: str, reason: str) -> None:
        """Record that a login attempt failed."""
        self._logger.warning(
            "login_failed",
            identifier=identifier,
            reason=reason,
            **self._get_context_kwargs(),
        )
