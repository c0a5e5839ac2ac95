"""SQLAlchemy ORM models for the profiles bounded context."""

from profiles.infrastructure.models.link import LinkModel
from profiles.infrastructure.models.social_link import SocialLinkModel

__all__ = [
    "LinkModel",
    "SocialLinkModel",
]
