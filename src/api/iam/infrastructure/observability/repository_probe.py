"""Domain probe for IAM repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user persistence operations.
    """

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was successfully created."""
        ...

    def user_profile_saved(self, user_id: int, fields: list[str]) -> None:
        """Record that profile attributes were written."""
        ...

    def user_retrieved(self, user_id: int) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        ...

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        ...

    def duplicate_user(self, username: str, constraint: str) -> None:
        """Record that a unique constraint rejected a new user."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was successfully created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_profile_saved(self, user_id: int, fields: list[str]) -> None:
        """Record that profile attributes were written."""
        self._logger.info(
            "user_profile_saved",
            user_id=user_id,
            fields=fields,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: int) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        self._logger.debug(
            "username_not_found",
            username=username,
            **self._get_context_kwargs(),
        )

    def duplicate_user(self, username: str, constraint: str) -> None:
        """Record that a unique constraint rejected a new user."""
        self._logger.warning(
            "duplicate_user",
            username=username,
            constraint=constraint,
            **self._get_context_kwargs(),
        )
