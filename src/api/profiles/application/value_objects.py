"""Application-layer value objects for the profiles bounded context.

Submissions describe what the client asked for; read models describe
what is returned. Neither is persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from iam.domain.aggregates import User
from iam.domain.value_objects import Theme
from profiles.domain.entities import Link, SocialLink
from profiles.domain.value_objects import Platform


@dataclass(frozen=True)
class LinkSubmission:
    """One submitted link. None means the field was not provided."""

    id: int | None = None
    title: str | None = None
    url: str | None = None
    visible: bool | None = None


@dataclass(frozen=True)
class SocialLinkSubmission:
    """One submitted social link. None means the field was not provided."""

    id: int | None = None
    platform: Platform | None = None
    url: str | None = None
    visible: bool | None = None


@dataclass(frozen=True)
class ProfileSubmission:
    """A full or partial profile document.

    Attributes:
        attributes: Profile attributes that were present in the request,
            keyed by User attribute name. Absent keys are left untouched.
        links: Desired link collection, or None to leave links untouched.
        social_links: Desired social link collection, or None to leave
            social links untouched.
    """

    attributes: Mapping[str, Any] = field(default_factory=dict)
    links: tuple[LinkSubmission, ...] | None = None
    social_links: tuple[SocialLinkSubmission, ...] | None = None


@dataclass(frozen=True)
class FullProfile:
    """Everything the owner sees when editing their profile."""

    user: User
    links: list[Link]
    social_links: list[SocialLink]


@dataclass(frozen=True)
class PublicLink:
    id: int
    title: str
    url: str
    href: str


@dataclass(frozen=True)
class PublicSocialLink:
    id: int
    platform: Platform
    url: str
    href: str


@dataclass(frozen=True)
class PublicProfile:
    """The anonymous view of a profile: visible items only, no private fields."""

    username: str
    display_name: str
    bio: str
    theme: Theme
    show_profile_picture: bool
    profile_picture_url: str | None
    links: list[PublicLink]
    social_links: list[PublicSocialLink]


@dataclass
class ReconciliationSummary:
    """Counts of what a reconciliation did."""

    created: int = 0
    updated: int = 0
    deleted: int = 0
    skipped: int = 0
    failed: int = 0
    attributes_written: list[str] = field(default_factory=list)

    @property
    def is_noop(self) -> bool:
        return not (
            self.created
            or self.updated
            or self.deleted
            or self.failed
            or self.attributes_written
        )
