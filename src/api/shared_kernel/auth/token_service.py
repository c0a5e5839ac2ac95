"""Session token issuance and verification.

Tokens are HS256-signed JWTs carrying the user's id, username and email
plus ``iat``/``exp``. The server keeps no session table: a token is valid
exactly when its signature checks out and it has not expired.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from shared_kernel.auth.observability import (
    DefaultTokenServiceProbe,
    TokenServiceProbe,
)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenClaims:
    """Identity claims carried by a session token."""

    id: int
    username: str
    email: str


class TokenService:
    """Issues and verifies signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(days=7),
        probe: TokenServiceProbe | None = None,
    ):
        """Initialize the token service.

        Args:
            secret: HMAC key used to sign and verify tokens.
            ttl: Lifetime of an issued token (default: 7 days).
            probe: Observability probe for logging events.
        """
        self._secret = secret
        self._ttl = ttl
        self._probe = probe or DefaultTokenServiceProbe()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue_token(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """Sign a token for the given identity.

        Args:
            claims: Identity to embed.
            now: Issuance time (defaults to the current UTC time).

        Returns:
            Compact JWT string expiring ``ttl`` after ``now``.
        """
        issued_at = now or datetime.now(tz=timezone.utc)
        payload: dict[str, Any] = {
            "id": claims.id,
            "username": claims.username,
            "email": claims.email,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        self._probe.token_issued(user_id=claims.id)
        return token

    def verify_token(self, token: str | None) -> TokenClaims | None:
        """Return the token's claims, or None if it is not valid.

        Malformed, expired and badly signed tokens all yield None; the
        reason is only reported through the probe.
        """
        if not token:
            self._probe.token_rejected(reason="Missing token")
            return None

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_signature": True, "verify_exp": True},
            )
        except ExpiredSignatureError:
            self._probe.token_rejected(reason="Token expired")
            return None
        except JWTError as e:
            self._probe.token_rejected(reason=f"Invalid token: {e}")
            return None

        user_id = payload.get("id")
        username = payload.get("username")
        email = payload.get("email")
        if (
            not isinstance(user_id, int)
            or isinstance(user_id, bool)
            or not isinstance(username, str)
            or not isinstance(email, str)
        ):
            self._probe.token_rejected(reason="Missing identity claims")
            return None

        return TokenClaims(id=user_id, username=username, email=email)
