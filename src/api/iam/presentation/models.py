"""Pydantic models for authentication API requests and responses."""

from __future__ import annotations

from pydantic import Field, StrictStr

from iam.domain.aggregates import User
from shared_kernel.api_models import CamelModel


class SignupRequest(CamelModel):
    """Request model for signup.

    Every field is optional at the schema level so that missing fields
    produce the service's own validation message.
    """

    username: StrictStr | None = Field(default=None, description="3-50 characters")
    email: StrictStr | None = Field(default=None, description="Email address")
    password: StrictStr | None = Field(default=None, description="At least 6 characters")
    display_name: StrictStr | None = Field(
        default=None, description="Defaults to the username"
    )


class LoginRequest(CamelModel):
    """Request model for login. ``email`` also accepts a username."""

    email: StrictStr | None = Field(default=None, description="Email or username")
    password: StrictStr | None = Field(default=None, description="Password")


class UserResponse(CamelModel):
    """Response model for the authenticated user."""

    id: str = Field(..., description="User ID")
    username: str
    email: str
    display_name: str

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse without credentials or profile content
        """
        return cls(
            id=str(user.id),
            username=user.username,
            email=user.email,
            display_name=user.display_name,
        )


class AuthResponse(CamelModel):
    """Response model for signup and login."""

    success: bool = True
    user: UserResponse


class LogoutResponse(CamelModel):
    """Response model for logout."""

    success: bool = True
