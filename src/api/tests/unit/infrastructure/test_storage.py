"""Unit tests for per-request storage selection."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from infrastructure.database.transactions import SqlTransactionManager
from infrastructure.memory import InMemoryDatabase, InMemoryTransactionManager
from infrastructure.settings import StorageBackend
from infrastructure.storage import StorageHandle, get_storage


def _gate(use_database: bool):
    gate = MagicMock()
    gate.use_database = AsyncMock(return_value=use_database)
    return gate


class TestStorageHandle:
    def test_for_memory(self):
        database = InMemoryDatabase()

        handle = StorageHandle.for_memory(database)

        assert handle.backend is StorageBackend.MEMORY
        assert handle.memory is database
        assert handle.session is None
        assert isinstance(handle.transactions, InMemoryTransactionManager)

    def test_for_session(self):
        session = AsyncMock()

        handle = StorageHandle.for_session(session)

        assert handle.backend is StorageBackend.POSTGRES
        assert handle.session is session
        assert isinstance(handle.transactions, SqlTransactionManager)


class TestGetStorage:
    """Tests for the get_storage dependency."""

    @pytest.mark.asyncio
    async def test_memory_when_gate_says_so(self):
        handles = [handle async for handle in get_storage(_gate(False))]

        assert len(handles) == 1
        assert handles[0].backend is StorageBackend.MEMORY

    @pytest.mark.asyncio
    async def test_session_when_database_is_usable(self):
        session = AsyncMock()
        session_context = MagicMock()
        session_context.__aenter__ = AsyncMock(return_value=session)
        session_context.__aexit__ = AsyncMock(return_value=False)
        sessionmaker = MagicMock(return_value=session_context)

        with patch(
            "infrastructure.storage.get_sessionmaker", return_value=sessionmaker
        ):
            handles = [handle async for handle in get_storage(_gate(True))]

        assert handles[0].session is session
        session_context.__aexit__.assert_awaited_once()
