"""Session cookie helpers.

The session token travels in an HTTP-only, SameSite=Lax cookie whose
lifetime matches the token's. The Secure flag is on in production unless
explicitly overridden.
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import Response

from infrastructure.settings import AuthSettings, get_auth_settings, get_settings


def cookie_is_secure(settings: AuthSettings) -> bool:
    """Resolve the Secure flag from the override or the environment."""
    if settings.cookie_secure is not None:
        return settings.cookie_secure
    return get_settings().is_production


def set_session_cookie(
    response: Response,
    token: str,
    settings: AuthSettings | None = None,
) -> None:
    """Attach the session token cookie to a response."""
    settings = settings or get_auth_settings()
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=int(timedelta(days=settings.token_ttl_days).total_seconds()),
        path="/",
        httponly=True,
        secure=cookie_is_secure(settings),
        samesite="lax",
    )


def clear_session_cookie(
    response: Response,
    settings: AuthSettings | None = None,
) -> None:
    """Expire the session token cookie."""
    settings = settings or get_auth_settings()
    response.delete_cookie(
        key=settings.cookie_name,
        path="/",
        httponly=True,
        secure=cookie_is_secure(settings),
        samesite="lax",
    )
