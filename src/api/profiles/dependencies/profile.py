"""Dependency injection for the profiles bounded context.

Builds repositories for the request's storage backend and composes them
into the profile services.
"""

from typing import Annotated

from fastapi import Depends

from iam.application.value_objects import AuthenticatedUser
from iam.dependencies.authentication import get_current_user, get_user_repository
from iam.ports.repositories import IUserRepository
from infrastructure.storage import StorageHandle, get_storage
from profiles.application.observability import (
    DefaultProfileServiceProbe,
    DefaultPublicProfileProbe,
    ProfileServiceProbe,
    PublicProfileProbe,
)
from profiles.application.services import ProfileService, PublicProfileService
from profiles.infrastructure.link_repository import (
    LinkRepository,
    SocialLinkRepository,
)
from profiles.infrastructure.memory_repositories import (
    InMemoryLinkRepository,
    InMemorySocialLinkRepository,
)
from profiles.ports.repositories import ILinkRepository, ISocialLinkRepository
from shared_kernel.middleware import get_observation_context
from shared_kernel.observability_context import ObservationContext


def get_link_repository(
    storage: Annotated[StorageHandle, Depends(get_storage)],
) -> ILinkRepository:
    """Get the link repository for the request's storage backend."""
    if storage.session is not None:
        return LinkRepository(session=storage.session)
    assert storage.memory is not None
    return InMemoryLinkRepository(database=storage.memory)


def get_social_link_repository(
    storage: Annotated[StorageHandle, Depends(get_storage)],
) -> ISocialLinkRepository:
    """Get the social link repository for the request's storage backend."""
    if storage.session is not None:
        return SocialLinkRepository(session=storage.session)
    assert storage.memory is not None
    return InMemorySocialLinkRepository(database=storage.memory)


def get_profile_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
) -> ProfileServiceProbe:
    """Get ProfileServiceProbe bound to the request and the acting user.

    Returns:
        DefaultProfileServiceProbe instance for observability
    """
    return DefaultProfileServiceProbe().with_context(
        context.with_user(str(current_user.user_id))
    )


def get_public_profile_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> PublicProfileProbe:
    """Get PublicProfileProbe bound to the request context.

    Returns:
        DefaultPublicProfileProbe instance for observability
    """
    return DefaultPublicProfileProbe().with_context(context)


def get_profile_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    link_repo: Annotated[ILinkRepository, Depends(get_link_repository)],
    social_link_repo: Annotated[
        ISocialLinkRepository, Depends(get_social_link_repository)
    ],
    storage: Annotated[StorageHandle, Depends(get_storage)],
    probe: Annotated[ProfileServiceProbe, Depends(get_profile_service_probe)],
) -> ProfileService:
    """Get ProfileService instance.

    All repositories share the request's storage handle via FastAPI
    dependency caching.
    """
    return ProfileService(
        user_repository=user_repo,
        link_repository=link_repo,
        social_link_repository=social_link_repo,
        transactions=storage.transactions,
        probe=probe,
    )


def get_public_profile_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    link_repo: Annotated[ILinkRepository, Depends(get_link_repository)],
    social_link_repo: Annotated[
        ISocialLinkRepository, Depends(get_social_link_repository)
    ],
    storage: Annotated[StorageHandle, Depends(get_storage)],
    probe: Annotated[PublicProfileProbe, Depends(get_public_profile_probe)],
) -> PublicProfileService:
    """Get PublicProfileService instance."""
    return PublicProfileService(
        user_repository=user_repo,
        link_repository=link_repo,
        social_link_repository=social_link_repo,
        transactions=storage.transactions,
        probe=probe,
    )
