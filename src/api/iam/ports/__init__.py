"""Ports (interfaces) for IAM bounded context.

Ports define the contracts for repositories and domain services without
specifying implementation details. This allows for dependency inversion
and makes the domain layer independent of infrastructure.
"""

from iam.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    InvalidCredentialsError,
    InvalidLoginError,
    InvalidSignupError,
)
from iam.ports.repositories import IUserRepository

__all__ = [
    "IUserRepository",
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "InvalidCredentialsError",
    "InvalidLoginError",
    "InvalidSignupError",
]
