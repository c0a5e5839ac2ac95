"""Unit tests for DatabaseHealthGate."""

from unittest.mock import AsyncMock, create_autospec

import pytest
from sqlalchemy.exc import ProgrammingError

from infrastructure.database.health import DatabaseHealthGate
from infrastructure.observability import StorageProbe
from infrastructure.settings import StorageBackend, StorageSettings


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_probe():
    return create_autospec(StorageProbe, instance=True)


def _gate(ping, clock, probe, backend=StorageBackend.AUTO) -> DatabaseHealthGate:
    return DatabaseHealthGate(
        settings=StorageSettings(
            backend=backend,
            health_recheck_seconds=30,
            retry_attempts=2,
            retry_max_wait_seconds=0.01,
        ),
        ping=ping,
        probe=probe,
        clock=clock,
    )


class TestForcedBackends:
    """Tests for explicitly configured backends."""

    @pytest.mark.asyncio
    async def test_postgres_never_pings(self, clock, mock_probe):
        ping = AsyncMock()
        gate = _gate(ping, clock, mock_probe, backend=StorageBackend.POSTGRES)

        assert await gate.use_database() is True
        ping.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_memory_never_pings(self, clock, mock_probe):
        ping = AsyncMock()
        gate = _gate(ping, clock, mock_probe, backend=StorageBackend.MEMORY)

        assert await gate.use_database() is False
        ping.assert_not_awaited()


class TestAutoBackend:
    """Tests for health-checked backend selection."""

    @pytest.mark.asyncio
    async def test_uses_database_when_reachable(self, clock, mock_probe):
        gate = _gate(AsyncMock(), clock, mock_probe)

        assert await gate.use_database() is True
        assert gate.status.database_reachable is True

    @pytest.mark.asyncio
    async def test_result_is_cached_until_recheck(self, clock, mock_probe):
        ping = AsyncMock()
        gate = _gate(ping, clock, mock_probe)

        await gate.use_database()
        clock.now += 10
        await gate.use_database()
        assert ping.await_count == 1

        clock.now += 30
        await gate.use_database()
        assert ping.await_count == 2

    @pytest.mark.asyncio
    async def test_falls_back_when_unreachable(self, clock, mock_probe):
        ping = AsyncMock(side_effect=ConnectionRefusedError("refused"))
        gate = _gate(ping, clock, mock_probe)

        assert await gate.use_database() is False
        assert ping.await_count == 2  # retried once
        assert gate.status.last_error == "refused"
        mock_probe.database_unreachable.assert_called_once_with(error="refused")
        mock_probe.fallback_engaged.assert_called_once()

    @pytest.mark.asyncio
    async def test_fallback_is_reported_once(self, clock, mock_probe):
        ping = AsyncMock(side_effect=ConnectionRefusedError("refused"))
        gate = _gate(ping, clock, mock_probe)

        await gate.check()
        await gate.check()

        mock_probe.fallback_engaged.assert_called_once()

    @pytest.mark.asyncio
    async def test_recovers_after_recheck(self, clock, mock_probe):
        ping = AsyncMock(side_effect=[OSError("down"), OSError("down"), None])
        gate = _gate(ping, clock, mock_probe)

        assert await gate.use_database() is False
        clock.now += 31
        assert await gate.use_database() is True

        mock_probe.database_recovered.assert_called_once()
        assert gate.status.last_error is None

    @pytest.mark.asyncio
    async def test_permanent_errors_also_fall_back(self, clock, mock_probe):
        ping = AsyncMock(
            side_effect=ProgrammingError("SELECT 1", {}, Exception("no such database"))
        )
        gate = _gate(ping, clock, mock_probe)

        assert await gate.use_database() is False
        assert ping.await_count == 1
        assert "no such database" in gate.status.last_error
