"""Protocol for profile service observability.

Defines the interface for domain probes that capture application-level
domain events for reading and reconciling an owner's profile.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from profiles.application.value_objects import ReconciliationSummary
    from shared_kernel.observability_context import ObservationContext


class ProfileServiceProbe(Protocol):
    """Domain probe for profile service operations."""

    def profile_not_found(self, owner_id: int) -> None:
        """Record that the profile owner does not exist."""
        ...

    def stale_session_rejected(self, owner_id: int, token_username: str) -> None:
        """Record that a token named a different user than the stored owner."""
        ...

    def profile_reconciled(self, owner_id: int, summary: ReconciliationSummary) -> None:
        """Record the outcome of a reconciliation."""
        ...

    def profile_item_failed(
        self,
        owner_id: int,
        collection: str,
        action: str,
        item_id: int | None,
        error: str,
    ) -> None:
        """Record that one write of a reconciliation failed."""
        ...

    def with_context(self, context: ObservationContext) -> ProfileServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultProfileServiceProbe:
    """Default implementation of ProfileServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultProfileServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultProfileServiceProbe(logger=self._logger, context=context)

    def profile_not_found(self, owner_id: int) -> None:
        """Record that the profile owner does not exist."""
        self._logger.warning(
            "profile_not_found",
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def stale_session_rejected(self, owner_id: int, token_username: str) -> None:
        """Record that a token named a different user than the stored owner."""
        self._logger.warning(
            "stale_session_rejected",
            owner_id=owner_id,
            token_username=token_username,
            **self._get_context_kwargs(),
        )

    def profile_reconciled(self, owner_id: int, summary: ReconciliationSummary) -> None:
        """Record the outcome of a reconciliation."""
        self._logger.info(
            "profile_reconciled",
            owner_id=owner_id,
            created=summary.created,
            updated=summary.updated,
            deleted=summary.deleted,
            skipped=summary.skipped,
            failed=summary.failed,
            attributes_written=summary.attributes_written,
            **self._get_context_kwargs(),
        )

    def profile_item_failed(
        self,
        owner_id: int,
        collection: str,
        action: str,
        item_id: int | None,
        error: str,
    ) -> None:
        """Record that one write of a reconciliation failed."""
        self._logger.error(
            "profile_item_failed",
            owner_id=owner_id,
            collection=collection,
            action=action,
            item_id=item_id,
            error=error,
            **self._get_context_kwargs(),
        )
