"""Fixtures for profile tests."""

from __future__ import annotations

import pytest

from iam.domain.aggregates import User
from iam.domain.value_objects import UserRegistration


@pytest.fixture
def create_user(user_repository):
    """Factory creating users directly in the in-memory store."""

    async def _create(username: str = "alice") -> User:
        return await user_repository.create(
            UserRegistration(
                username=username,
                email=f"{username}@example.com",
                password_hash="hash",
                display_name=username.title(),
            )
        )

    return _create
