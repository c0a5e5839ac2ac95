"""Application services for the profiles bounded context."""

from profiles.application.services.profile_service import ProfileService
from profiles.application.services.public_profile_service import (
    PublicProfileService,
)

__all__ = [
    "ProfileService",
    "PublicProfileService",
]
