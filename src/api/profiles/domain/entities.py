"""Entities owned by a user's profile.

Links and social links belong to exactly one user. Their ids are
server-assigned and stay stable across edits, which is what lets a
resubmitted profile be matched against what is stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from profiles.domain.value_objects import Platform

LINK_TITLE_MAX_LENGTH = 200


@dataclass(frozen=True)
class Link:
    """An outbound link shown as a button on the public page."""

    id: int
    user_id: int
    title: str
    url: str
    visible: bool = True
    sort_order: int = 0
    created_at: datetime | None = None


@dataclass(frozen=True)
class SocialLink:
    """A social network icon shown on the public page."""

    id: int
    user_id: int
    platform: Platform
    url: str
    visible: bool = True
    created_at: datetime | None = None


@dataclass(frozen=True)
class NewLink:
    """A link about to be created."""

    title: str
    url: str
    visible: bool
    sort_order: int


@dataclass(frozen=True)
class NewSocialLink:
    """A social link about to be created."""

    platform: Platform
    url: str
    visible: bool
