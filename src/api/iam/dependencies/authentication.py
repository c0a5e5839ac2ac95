"""Dependency injection for authentication.

Composes storage resources and settings with the IAM repository, the
authentication service and the session token service.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from iam.application.observability import AuthServiceProbe, DefaultAuthServiceProbe
from iam.application.services import AuthService, resolve_session
from iam.application.value_objects import AuthenticatedUser
from iam.infrastructure.memory_user_repository import InMemoryUserRepository
from iam.infrastructure.user_repository import UserRepository
from iam.ports.repositories import IUserRepository
from infrastructure.settings import get_auth_settings
from infrastructure.storage import StorageHandle, get_storage
from shared_kernel.auth import DefaultTokenServiceProbe, TokenService
from shared_kernel.middleware import get_observation_context
from shared_kernel.observability_context import ObservationContext


@lru_cache
def get_token_service() -> TokenService:
    """Get cached token service.

    Returns:
        TokenService signing with the configured secret and lifetime.
    """
    settings = get_auth_settings()
    return TokenService(
        secret=settings.jwt_secret.get_secret_value(),
        ttl=timedelta(days=settings.token_ttl_days),
        probe=DefaultTokenServiceProbe(),
    )


def get_auth_service_probe(
    context: Annotated[ObservationContext, Depends(get_observation_context)],
) -> AuthServiceProbe:
    """Get AuthServiceProbe instance bound to the request context.

    Returns:
        DefaultAuthServiceProbe instance for observability
    """
    return DefaultAuthServiceProbe().with_context(context)


def get_user_repository(
    storage: Annotated[StorageHandle, Depends(get_storage)],
) -> IUserRepository:
    """Get the user repository for the request's storage backend.

    Args:
        storage: Storage handle selected by the health gate

    Returns:
        UserRepository on PostgreSQL, InMemoryUserRepository otherwise
    """
    if storage.session is not None:
        return UserRepository(session=storage.session)
    assert storage.memory is not None
    return InMemoryUserRepository(database=storage.memory)


def get_auth_service(
    user_repo: Annotated[IUserRepository, Depends(get_user_repository)],
    storage: Annotated[StorageHandle, Depends(get_storage)],
    token_service: Annotated[TokenService, Depends(get_token_service)],
    probe: Annotated[AuthServiceProbe, Depends(get_auth_service_probe)],
) -> AuthService:
    """Get AuthService instance.

    Args:
        user_repo: User repository (shares storage via FastAPI dependency caching)
        storage: Storage handle providing the transaction manager
        token_service: Session token service
        probe: Auth service probe for observability

    Returns:
        AuthService instance
    """
    return AuthService(
        user_repository=user_repo,
        transactions=storage.transactions,
        token_service=token_service,
        bcrypt_rounds=get_auth_settings().bcrypt_rounds,
        probe=probe,
    )


async def get_current_user(
    request: Request,
    token_service: Annotated[TokenService, Depends(get_token_service)],
) -> AuthenticatedUser:
    """Authenticate the request from its session cookie.

    Only the token is checked; the user row is not read here.

    Args:
        request: Incoming request carrying the cookie
        token_service: Session token service

    Returns:
        AuthenticatedUser from the token claims

    Raises:
        HTTPException 401: If the cookie is missing or the token is invalid
    """
    token = request.cookies.get(get_auth_settings().cookie_name)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    user = resolve_session(token_service, token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return user
