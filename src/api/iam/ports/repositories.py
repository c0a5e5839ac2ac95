"""Repository protocols (ports) for IAM bounded context.

Repository protocols define the interface for persisting and retrieving
aggregates. PostgreSQL and in-memory implementations both satisfy them.
"""

from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from iam.domain.aggregates import User
from iam.domain.value_objects import UserId, UserRegistration


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate persistence.

    Lookups by username and email are case-insensitive; both values are
    stored lower-cased.
    """

    async def create(self, registration: UserRegistration) -> User:
        """Persist a new user and assign its id.

        Args:
            registration: Normalized signup data

        Returns:
            The stored User aggregate with its server-assigned id

        Raises:
            DuplicateUsernameError: If the username is already taken
            DuplicateEmailError: If the email is already registered
        """
        ...

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_username(self, username: str) -> User | None:
        """Retrieve a user by their username.

        Args:
            username: The username to search for (any case)

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by their email address.

        Args:
            email: The email to search for (any case)

        Returns:
            The User aggregate, or None if not found
        """
        ...

    async def save_profile(self, user: User, fields: Sequence[str]) -> None:
        """Write the named profile attributes of a user.

        Args:
            user: The User aggregate carrying the new values
            fields: Attribute names from PROFILE_FIELDS to write
        """
        ...
