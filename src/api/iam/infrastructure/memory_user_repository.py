"""In-memory implementation of IUserRepository.

Serves requests while PostgreSQL is unreachable, and backs the unit
tests. Rows are stored as plain dictionaries in the shared
InMemoryDatabase so profile repositories can see the same users.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from iam.domain.aggregates import User
from iam.domain.value_objects import Theme, UserId, UserRegistration
from iam.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from iam.ports.exceptions import DuplicateEmailError, DuplicateUsernameError
from iam.ports.repositories import IUserRepository
from infrastructure.memory import InMemoryDatabase

USERS_TABLE = "users"


class InMemoryUserRepository(IUserRepository):
    """Dictionary-backed repository for User aggregates."""

    def __init__(
        self, database: InMemoryDatabase, probe: UserRepositoryProbe | None = None
    ) -> None:
        self._rows = database.table(USERS_TABLE)
        self._database = database
        self._probe = probe or DefaultUserRepositoryProbe()

    async def create(self, registration: UserRegistration) -> User:
        for row in self._rows.values():
            if row["username"] == registration.username:
                self._probe.duplicate_user(registration.username, "username")
                raise DuplicateUsernameError("Username already taken")
            if row["email"] == registration.email:
                self._probe.duplicate_user(registration.username, "email")
                raise DuplicateEmailError("Email already registered")

        now = datetime.now(timezone.utc)
        user_id = self._database.next_id(USERS_TABLE)
        row: dict[str, Any] = {
            "id": user_id,
            "username": registration.username,
            "email": registration.email,
            "password_hash": registration.password_hash,
            "display_name": registration.display_name,
            "bio": "",
            "show_profile_picture": True,
            "profile_picture_url": None,
            "theme": Theme().to_document(),
            "created_at": now,
            "updated_at": now,
        }
        self._rows[user_id] = row

        self._probe.user_created(user_id, registration.username)
        return self._to_domain(row)

    async def get_by_id(self, user_id: UserId) -> User | None:
        row = self._rows.get(user_id.value)
        if row is None:
            self._probe.user_not_found(user_id.value)
            return None
        self._probe.user_retrieved(user_id.value)
        return self._to_domain(row)

    async def get_by_username(self, username: str) -> User | None:
        row = self._find("username", username.lower())
        if row is None:
            self._probe.username_not_found(username)
            return None
        self._probe.user_retrieved(row["id"])
        return self._to_domain(row)

    async def get_by_email(self, email: str) -> User | None:
        row = self._find("email", email.lower())
        if row is None:
            return None
        self._probe.user_retrieved(row["id"])
        return self._to_domain(row)

    async def save_profile(self, user: User, fields: Sequence[str]) -> None:
        row = self._rows.get(user.id.value)
        if row is None or not fields:
            return

        for name in fields:
            value = getattr(user, name)
            row[name] = value.to_document() if name == "theme" else value
        row["updated_at"] = datetime.now(timezone.utc)
        self._probe.user_profile_saved(user.id.value, list(fields))

    def _find(self, column: str, value: str) -> dict[str, Any] | None:
        for row in self._rows.values():
            if row[column] == value:
                return row
        return None

    @staticmethod
    def _to_domain(row: dict[str, Any]) -> User:
        return User(
            id=UserId(value=row["id"]),
            username=row["username"],
            email=row["email"],
            password_hash=row["password_hash"],
            display_name=row["display_name"],
            bio=row["bio"],
            show_profile_picture=row["show_profile_picture"],
            profile_picture_url=row["profile_picture_url"],
            theme=Theme.from_document(row["theme"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
