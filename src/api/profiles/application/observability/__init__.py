"""Domain-Oriented Observability for the profiles application layer."""

from profiles.application.observability.profile_service_probe import (
    DefaultProfileServiceProbe,
    ProfileServiceProbe,
)
from profiles.application.observability.public_profile_probe import (
    DefaultPublicProfileProbe,
    PublicProfileProbe,
)

__all__ = [
    "ProfileServiceProbe",
    "DefaultProfileServiceProbe",
    "PublicProfileProbe",
    "DefaultPublicProfileProbe",
]
