"""HTTP routes for authentication.

Signup and login set the session cookie; logout clears it.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from iam.application.services import AuthService
from iam.dependencies.authentication import get_auth_service
from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidLoginError,
    InvalidSignupError,
)
from iam.presentation.models import (
    AuthResponse,
    LoginRequest,
    LogoutResponse,
    SignupRequest,
    UserResponse,
)
from shared_kernel.auth import clear_session_cookie, set_session_cookie

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/signup")
async def signup(
    request: SignupRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Register a new user and start a session.

    Args:
        request: Signup fields
        response: Outgoing response the session cookie is attached to
        service: Authentication service

    Returns:
        AuthResponse with the new user

    Raises:
        HTTPException: 400 if a field is invalid or already taken
    """
    try:
        result = await service.signup(
            username=request.username,
            email=request.email,
            password=request.password,
            display_name=request.display_name,
        )
    except (InvalidSignupError, DuplicateUsernameError, DuplicateEmailError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    set_session_cookie(response, result.token)
    return AuthResponse(user=UserResponse.from_domain(result.user))


@router.post("/login")
async def login(
    request: LoginRequest,
    response: Response,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Log in with email (or username) and password.

    Raises:
        HTTPException: 400 if a field is missing
        HTTPException: 401 if the credentials do not match
    """
    try:
        result = await service.login(
            identifier=request.email,
            password=request.password,
        )
    except InvalidLoginError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e

    set_session_cookie(response, result.token)
    return AuthResponse(user=UserResponse.from_domain(result.user))


@router.post("/logout")
async def logout(response: Response) -> LogoutResponse:
    """End the session by expiring the cookie."""
    clear_session_cookie(response)
    return LogoutResponse()
