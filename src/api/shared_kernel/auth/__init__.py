"""Authentication shared kernel module."""

from shared_kernel.auth.cookies import (
    clear_session_cookie,
    cookie_is_secure,
    set_session_cookie,
)
from shared_kernel.auth.observability import (
    DefaultTokenServiceProbe,
    TokenServiceProbe,
)
from shared_kernel.auth.token_service import TokenClaims, TokenService

__all__ = [
    "TokenClaims",
    "TokenService",
    "TokenServiceProbe",
    "DefaultTokenServiceProbe",
    "clear_session_cookie",
    "cookie_is_secure",
    "set_session_cookie",
]
