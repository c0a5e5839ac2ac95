"""Public profile projection.

Builds the anonymous view of a profile: visible links and social links
in stored order, with owner-private fields left out.
"""

from __future__ import annotations

from functools import partial

from iam.ports.repositories import IUserRepository
from profiles.application.observability import (
    DefaultPublicProfileProbe,
    PublicProfileProbe,
)
from profiles.application.value_objects import (
    PublicLink,
    PublicProfile,
    PublicSocialLink,
)
from profiles.domain.value_objects import normalize_url
from profiles.ports.exceptions import ProfileNotFoundError
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository
from shared_kernel.persistence import ITransactionManager


class PublicProfileService:
    """Read-only service behind the public profile page."""

    def __init__(
        self,
        user_repository: IUserRepository,
        link_repository: ILinkRepository,
        social_link_repository: ISocialLinkRepository,
        transactions: ITransactionManager,
        probe: PublicProfileProbe | None = None,
    ):
        self._users = user_repository
        self._links = link_repository
        self._social_links = social_link_repository
        self._transactions = transactions
        self._probe = probe or DefaultPublicProfileProbe()

    async def project(self, username: str) -> PublicProfile:
        """Return the public view of the profile with this username.

        The lookup is case-insensitive.

        Raises:
            ProfileNotFoundError: If no user has this username
            StorageUnavailableError: If storage stays unreachable
        """
        profile = await self._transactions.read(
            "project_profile", partial(self._load, username.strip().lower())
        )
        if profile is None:
            self._probe.public_profile_not_found(username)
            raise ProfileNotFoundError("User not found")

        self._probe.public_profile_served(
            username=profile.username,
            link_count=len(profile.links),
            social_link_count=len(profile.social_links),
        )
        return profile

    async def _load(self, username: str) -> PublicProfile | None:
        user = await self._users.get_by_username(username)
        if user is None:
            return None

        links = await self._links.list_for_owner(user.id)
        social_links = await self._social_links.list_for_owner(user.id)

        return PublicProfile(
            username=user.username,
            display_name=user.display_name,
            bio=user.bio,
            theme=user.theme,
            show_profile_picture=user.show_profile_picture,
            profile_picture_url=user.profile_picture_url,
            links=[
                PublicLink(
                    id=link.id,
                    title=link.title,
                    url=link.url,
                    href=normalize_url(link.url),
                )
                for link in links
                if link.visible
            ],
            social_links=[
                PublicSocialLink(
                    id=social.id,
                    platform=social.platform,
                    url=social.url,
                    href=normalize_url(social.url),
                )
                for social in social_links
                if social.visible
            ],
        )
