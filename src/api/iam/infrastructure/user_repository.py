"""PostgreSQL implementation of IUserRepository.

Transactions are owned by the calling service; this repository only
issues statements on the session it is given.
"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from iam.domain.aggregates import User
from iam.domain.value_objects import Theme, UserId, UserRegistration
from iam.infrastructure.models import UserModel
from iam.infrastructure.models.user import (
    EMAIL_UNIQUE_CONSTRAINT,
    USERNAME_UNIQUE_CONSTRAINT,
)
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError, DuplicateUsernameError
from iam.ports.repositories import IUserRepository


class UserRepository(IUserRepository):
    """PostgreSQL-backed repository for User aggregates."""

    def __init__(
        self, session: AsyncSession, probe: UserRepositoryProbe | None = None
    ) -> None:
        """Initialize repository with database session and probe.

        Args:
            session: AsyncSession from FastAPI dependency injection
            probe: Optional domain probe for observability
        """
        self._session = session
        self._probe = probe or DefaultUserRepositoryProbe()

    async def create(self, registration: UserRegistration) -> User:
        """Insert a new user row and return the aggregate.

        Args:
            registration: Normalized signup data

        Returns:
            The stored User with its server-assigned id

        Raises:
            DuplicateUsernameError: If the username unique constraint fails
            DuplicateEmailError: If the email unique constraint fails
        """
        model = UserModel(
            username=registration.username,
            email=registration.email,
            password_hash=registration.password_hash,
            display_name=registration.display_name,
            bio="",
            show_profile_picture=True,
            profile_picture_url=None,
            theme=Theme().to_document(),
        )
        self._session.add(model)

        try:
            await self._session.flush()
        except IntegrityError as e:
            # Handle unique constraint violation
            if USERNAME_UNIQUE_CONSTRAINT in str(e):
                self._probe.duplicate_user(
                    registration.username, USERNAME_UNIQUE_CONSTRAINT
                )
                raise DuplicateUsernameError("Username already taken") from e
            if EMAIL_UNIQUE_CONSTRAINT in str(e):
                self._probe.duplicate_user(
                    registration.username, EMAIL_UNIQUE_CONSTRAINT
                )
                raise DuplicateEmailError("Email already registered") from e
            raise

        self._probe.user_created(model.id, model.username)
        return self._to_domain(model)

    async def get_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by their ID.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.id == user_id.value)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.user_not_found(user_id.value)
            return None

        self._probe.user_retrieved(user_id.value)
        return self._to_domain(model)

    async def get_by_username(self, username: str) -> User | None:
        """Retrieve a user by their username.

        Args:
            username: The username to search for (any case)

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.username == username.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            self._probe.username_not_found(username)
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve a user by their email address.

        Args:
            email: The email to search for (any case)

        Returns:
            The User aggregate, or None if not found
        """
        stmt = select(UserModel).where(UserModel.email == email.lower())
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        self._probe.user_retrieved(model.id)
        return self._to_domain(model)

    async def save_profile(self, user: User, fields: Sequence[str]) -> None:
        """Write the named profile attributes of a user.

        Args:
            user: The User aggregate carrying the new values
            fields: Attribute names from PROFILE_FIELDS to write
        """
        if not fields:
            return

        values = {name: getattr(user, name) for name in fields}
        if "theme" in values:
            values["theme"] = user.theme.to_document()

        stmt = (
            update(UserModel)
            .where(UserModel.id == user.id.value)
            .values(**values)
        )
        await self._session.execute(stmt)
        self._probe.user_profile_saved(user.id.value, list(fields))

    @staticmethod
    def _to_domain(model: UserModel) -> User:
        return User(
            id=UserId(value=model.id),
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            display_name=model.display_name,
            bio=model.bio or "",
            show_profile_picture=model.show_profile_picture,
            profile_picture_url=model.profile_picture_url,
            theme=Theme.from_document(model.theme),
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
