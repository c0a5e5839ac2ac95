"""Domain layer for the profiles bounded context."""

from profiles.domain.entities import Link, NewLink, NewSocialLink, SocialLink
from profiles.domain.value_objects import Platform, normalize_url, parse_wire_id

__all__ = [
    "Link",
    "NewLink",
    "NewSocialLink",
    "Platform",
    "SocialLink",
    "normalize_url",
    "parse_wire_id",
]
