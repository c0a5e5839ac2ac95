"""Repository protocols (ports) for the profiles bounded context.

Every method is scoped by owner: reads only return the owner's rows and
writes only touch rows whose ``user_id`` is the owner.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from iam.domain.value_objects import UserId
from profiles.domain.entities import Link, NewLink, NewSocialLink, SocialLink


@runtime_checkable
class ILinkRepository(Protocol):
    """Repository for a user's links."""

    async def list_for_owner(self, owner_id: UserId) -> list[Link]:
        """List the owner's links ordered by sort order, then id.

        Args:
            owner_id: The owning user

        Returns:
            The owner's links in display order
        """
        ...

    async def create(self, owner_id: UserId, link: NewLink) -> Link:
        """Insert a link for the owner and assign its id.

        Args:
            owner_id: The owning user
            link: Field values for the new link

        Returns:
            The stored link
        """
        ...

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        """Update fields of one of the owner's links.

        Args:
            owner_id: The owning user
            link_id: Id of the link to change
            changes: Attribute names mapped to new values

        Returns:
            True if a row owned by the owner was updated
        """
        ...

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        """Delete one of the owner's links.

        Returns:
            True if a row owned by the owner was deleted
        """
        ...


@runtime_checkable
class ISocialLinkRepository(Protocol):
    """Repository for a user's social links."""

    async def list_for_owner(self, owner_id: UserId) -> list[SocialLink]:
        """List the owner's social links ordered by id."""
        ...

    async def create(self, owner_id: UserId, link: NewSocialLink) -> SocialLink:
        """Insert a social link for the owner and assign its id."""
        ...

    async def update(
        self, owner_id: UserId, link_id: int, changes: Mapping[str, Any]
    ) -> bool:
        """Update fields of one of the owner's social links.

        Returns:
            True if a row owned by the owner was updated
        """
        ...

    async def delete(self, owner_id: UserId, link_id: int) -> bool:
        """Delete one of the owner's social links.

        Returns:
            True if a row owned by the owner was deleted
        """
        ...
