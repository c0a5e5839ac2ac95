"""Unit tests for the transaction managers."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.database.transactions import (
    OWNER_LOCK_NAMESPACE,
    SqlTransactionManager,
)
from infrastructure.memory import InMemoryDatabase, InMemoryTransactionManager
from infrastructure.settings import StorageSettings
from shared_kernel.persistence import ITransactionManager


class _AsyncContext:
    """Async context manager recording entry and exit."""

    def __init__(self, events: list[str], name: str) -> None:
        self._events = events
        self._name = name

    async def __aenter__(self):
        self._events.append(f"enter:{self._name}")

    async def __aexit__(self, *exc_info):
        self._events.append(f"exit:{self._name}")
        return False


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def mock_session(events):
    session = AsyncMock()
    session.begin = MagicMock(side_effect=lambda: _AsyncContext(events, "begin"))
    session.begin_nested = MagicMock(
        side_effect=lambda: _AsyncContext(events, "savepoint")
    )
    return session


@pytest.fixture
def manager(mock_session) -> SqlTransactionManager:
    return SqlTransactionManager(
        mock_session,
        settings=StorageSettings(retry_attempts=2, retry_max_wait_seconds=0.01),
    )


class TestSqlTransactionManager:
    """Tests for SqlTransactionManager."""

    def test_implements_protocol(self, manager):
        assert isinstance(manager, ITransactionManager)

    @pytest.mark.asyncio
    async def test_transaction_wraps_session_begin(self, manager, events):
        async with manager.transaction():
            events.append("work")

        assert events == ["enter:begin", "work", "exit:begin"]

    @pytest.mark.asyncio
    async def test_owner_transaction_takes_advisory_lock(
        self, manager, mock_session, events
    ):
        async with manager.owner_transaction(42):
            events.append("work")

        assert events == ["enter:begin", "work", "exit:begin"]
        stmt, params = mock_session.execute.call_args[0]
        assert "pg_advisory_xact_lock" in str(stmt)
        assert params == {"namespace": OWNER_LOCK_NAMESPACE, "owner_id": 42}

    @pytest.mark.asyncio
    async def test_savepoint_uses_nested_transaction(self, manager, events):
        async with manager.savepoint():
            pass

        assert events == ["enter:savepoint", "exit:savepoint"]

    @pytest.mark.asyncio
    async def test_read_rolls_back_between_attempts(self, manager, mock_session):
        fn = AsyncMock(side_effect=[ConnectionResetError("reset"), "value"])

        assert await manager.read("get_profile", fn) == "value"
        mock_session.rollback.assert_awaited_once()


class TestInMemoryTransactionManager:
    """Tests for InMemoryTransactionManager."""

    def test_implements_protocol(self):
        assert isinstance(
            InMemoryTransactionManager(InMemoryDatabase()), ITransactionManager
        )

    @pytest.mark.asyncio
    async def test_owner_transactions_serialize_per_owner(self):
        manager = InMemoryTransactionManager(InMemoryDatabase())
        order: list[str] = []

        async def _work(name: str, owner: int):
            async with manager.owner_transaction(owner):
                order.append(f"start:{name}")
                await asyncio.sleep(0.01)
                order.append(f"end:{name}")

        await asyncio.gather(_work("a", 1), _work("b", 1))

        assert order == ["start:a", "end:a", "start:b", "end:b"]

    @pytest.mark.asyncio
    async def test_different_owners_do_not_contend(self):
        manager = InMemoryTransactionManager(InMemoryDatabase())
        order: list[str] = []

        async def _work(name: str, owner: int):
            async with manager.owner_transaction(owner):
                order.append(f"start:{name}")
                await asyncio.sleep(0.01)
                order.append(f"end:{name}")

        await asyncio.gather(_work("a", 1), _work("b", 2))

        assert order[:2] == ["start:a", "start:b"]
