"""Unit tests for the transient-failure retry policy."""

import asyncio
from unittest.mock import AsyncMock, create_autospec

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from infrastructure.database.exceptions import StorageUnavailableError
from infrastructure.database.retry import is_transient, run_with_retry
from infrastructure.observability import StorageProbe
from infrastructure.settings import StorageSettings


@pytest.fixture
def settings() -> StorageSettings:
    return StorageSettings(retry_attempts=3, retry_max_wait_seconds=0.01)


@pytest.fixture
def mock_probe():
    return create_autospec(StorageProbe, instance=True)


def _operational_error() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection reset"))


class TestIsTransient:
    @pytest.mark.parametrize(
        "error",
        [
            _operational_error(),
            ConnectionResetError("reset"),
            asyncio.TimeoutError(),
        ],
    )
    def test_transient(self, error):
        assert is_transient(error) is True

    @pytest.mark.parametrize(
        "error",
        [
            IntegrityError("INSERT", {}, Exception("duplicate")),
            ValueError("bad"),
        ],
    )
    def test_not_transient(self, error):
        assert is_transient(error) is False


class TestRunWithRetry:
    """Tests for run_with_retry."""

    @pytest.mark.asyncio
    async def test_returns_result(self, settings):
        fn = AsyncMock(return_value=42)

        assert await run_with_retry("op", fn, settings=settings) == 42
        fn.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_retries_transient_failures(self, settings, mock_probe):
        fn = AsyncMock(side_effect=[_operational_error(), "ok"])
        before_retry = AsyncMock()

        result = await run_with_retry(
            "op", fn, settings=settings, probe=mock_probe, before_retry=before_retry
        )

        assert result == "ok"
        assert fn.await_count == 2
        before_retry.assert_awaited_once()
        mock_probe.transient_failure.assert_called_once()

    @pytest.mark.asyncio
    async def test_exhausted_retries_raise_storage_unavailable(
        self, settings, mock_probe
    ):
        fn = AsyncMock(side_effect=ConnectionRefusedError("refused"))

        with pytest.raises(StorageUnavailableError) as exc_info:
            await run_with_retry("load", fn, settings=settings, probe=mock_probe)

        assert fn.await_count == 3
        assert exc_info.value.attempts == 3
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)
        mock_probe.retries_exhausted.assert_called_once_with(
            operation="load", attempts=3, error="refused"
        )

    @pytest.mark.asyncio
    async def test_other_errors_propagate_immediately(self, settings):
        fn = AsyncMock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError, match="bug"):
            await run_with_retry("op", fn, settings=settings)

        fn.assert_awaited_once()
