"""Unit test fixtures backed by the in-memory storage adapter."""

from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from iam.infrastructure.memory_user_repository import InMemoryUserRepository
from infrastructure.memory import InMemoryDatabase, InMemoryTransactionManager
from profiles.infrastructure.memory_repositories import (
    InMemoryLinkRepository,
    InMemorySocialLinkRepository,
)
from shared_kernel.auth import TokenService

TEST_JWT_SECRET = "unit-test-secret"

# Lowest work factor bcrypt accepts; keeps hashing fast in tests
TEST_BCRYPT_ROUNDS = 4


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    """Provide an empty in-memory database."""
    return InMemoryDatabase()


@pytest.fixture
def transactions(memory_db: InMemoryDatabase) -> InMemoryTransactionManager:
    return InMemoryTransactionManager(memory_db)


@pytest.fixture
def user_repository(memory_db: InMemoryDatabase) -> InMemoryUserRepository:
    return InMemoryUserRepository(database=memory_db)


@pytest.fixture
def link_repository(memory_db: InMemoryDatabase) -> InMemoryLinkRepository:
    return InMemoryLinkRepository(database=memory_db)


@pytest.fixture
def social_link_repository(
    memory_db: InMemoryDatabase,
) -> InMemorySocialLinkRepository:
    return InMemorySocialLinkRepository(database=memory_db)


@pytest.fixture
def token_service() -> TokenService:
    """Provide a token service signing with a test secret."""
    return TokenService(secret=TEST_JWT_SECRET)


@pytest.fixture
def app_client(
    memory_db: InMemoryDatabase,
    token_service: TokenService,
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[TestClient]:
    """TestClient for the full application on a fresh in-memory store.

    Server exceptions are rendered as responses so the 500 handler can be
    asserted on.
    """
    from iam.dependencies.authentication import get_token_service
    from infrastructure.settings import get_auth_settings, get_settings
    from infrastructure.storage import StorageHandle, get_storage
    from main import app

    monkeypatch.setenv("LINKBIO_AUTH_BCRYPT_ROUNDS", str(TEST_BCRYPT_ROUNDS))
    monkeypatch.delenv("LINKBIO_AUTH_COOKIE_SECURE", raising=False)
    monkeypatch.delenv("LINKBIO_ENVIRONMENT", raising=False)
    get_auth_settings.cache_clear()
    get_settings.cache_clear()

    app.dependency_overrides[get_storage] = lambda: StorageHandle.for_memory(memory_db)
    app.dependency_overrides[get_token_service] = lambda: token_service

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
    get_auth_settings.cache_clear()
    get_settings.cache_clear()
