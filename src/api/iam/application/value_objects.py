"""Application-layer value objects for IAM bounded context.

These are value objects specific to the application layer, representing
cross-cutting concerns like the authentication context of a request.
"""

from __future__ import annotations

from dataclasses import dataclass

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId


@dataclass(frozen=True)
class AuthenticatedUser:
    """The user a request was authenticated as.

    Built from session token claims alone; the user row is not read.
    This is an application-layer concept (not domain) because it represents
    the authentication context of the request, not a core business entity.
    """

    user_id: UserId
    username: str
    email: str


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful signup or login."""

    user: User
    token: str
