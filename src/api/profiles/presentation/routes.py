"""HTTP routes for profiles.

``/user`` is the owner's editing API and requires the session cookie.
``/username`` serves the public page data and requires nothing.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from iam.application.value_objects import AuthenticatedUser
from iam.dependencies.authentication import get_current_user
from profiles.application.services import ProfileService, PublicProfileService
from profiles.dependencies.profile import (
    get_profile_service,
    get_public_profile_service,
)
from profiles.ports.exceptions import (
    InvalidProfileSubmissionError,
    ProfileNotFoundError,
    StaleSessionError,
)
from profiles.presentation.models import (
    ProfileResponse,
    ProfileUpdateRequest,
    PublicProfileResponse,
)

router = APIRouter(tags=["profiles"])


@router.get("/user")
async def get_profile(
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Return the caller's full profile.

    Raises:
        HTTPException: 401 if not authenticated, or the session names another user
        HTTPException: 404 if the user no longer exists
    """
    try:
        profile = await service.get_profile(current_user.user_id, caller=current_user)
    except StaleSessionError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e
    except ProfileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    return ProfileResponse.from_domain(profile)


@router.post("/user")
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: Annotated[AuthenticatedUser, Depends(get_current_user)],
    service: Annotated[ProfileService, Depends(get_profile_service)],
) -> ProfileResponse:
    """Reconcile the caller's profile with the submitted document.

    Args:
        request: Full or partial profile document
        current_user: The authenticated owner
        service: Profile service

    Returns:
        The profile as stored after the update

    Raises:
        HTTPException: 400 if the document is malformed
        HTTPException: 401 if not authenticated, or the session names another user
        HTTPException: 404 if the user no longer exists
    """
    try:
        submission = request.to_submission()
        profile = await service.reconcile(
            current_user.user_id, submission, caller=current_user
        )
    except InvalidProfileSubmissionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except StaleSessionError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e
    except ProfileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    return ProfileResponse.from_domain(profile)


@router.get("/username")
async def get_public_profile(
    service: Annotated[PublicProfileService, Depends(get_public_profile_service)],
    username: Annotated[str | None, Query()] = None,
) -> PublicProfileResponse:
    """Return the public view of a profile.

    Raises:
        HTTPException: 400 if no username is given
        HTTPException: 404 if no user has this username
    """
    if username is None or not username.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username is required",
        )

    try:
        profile = await service.project(username)
    except ProfileNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    return PublicProfileResponse.from_domain(profile)
