"""Protocol for public profile observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class PublicProfileProbe(Protocol):
    """Domain probe for public profile reads."""

    def public_profile_served(
        self, username: str, link_count: int, social_link_count: int
    ) -> None:
        """Record that a public profile was served."""
        ...

    def public_profile_not_found(self, username: str) -> None:
        """Record that no profile exists for a username."""
        ...

    def with_context(self, context: ObservationContext) -> PublicProfileProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultPublicProfileProbe:
    """Default implementation of PublicProfileProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultPublicProfileProbe:
        """Create a new probe with observation context bound."""
        return DefaultPublicProfileProbe(logger=self._logger, context=context)

    def public_profile_served(
        self, username: str, link_count: int, social_link_count: int
    ) -> None:
        """Record that a public profile was served."""
        self._logger.debug(
            "public_profile_served",
            username=username,
            link_count=link_count,
            social_link_count=social_link_count,
            **self._get_context_kwargs(),
        )

    def public_profile_not_found(self, username: str) -> None:
        """Record that no profile exists for a username."""
        self._logger.info(
            "public_profile_not_found",
            username=username,
            **self._get_context_kwargs(),
        )
