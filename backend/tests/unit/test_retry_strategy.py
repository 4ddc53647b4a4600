"""Tests for provider retry strategy.

Tests behavior of retry logic:
- Exponential backoff with jitter
- Rate limit retry_after_seconds handling
- Non-retryable errors fail immediately
- Max retries enforcement
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.providers.config import ProviderConfig
from app.providers.errors import (
    AuthenticationError,
    RateLimitError,
    TransientError,
)
from app.providers.retry import _backoff_seconds, with_retries

_PATCH_SLEEP = "app.providers.retry.asyncio.sleep"


@pytest.fixture
def config():
    """Provider config with test retry settings."""
    return ProviderConfig(
        max_retries=3,
        retry_base_delay_ms=100,  # Fast for tests
        retry_max_delay_ms=1000,
    )


class TestWithRetriesSuccess:
    """Successful execution paths."""

    @pytest.mark.asyncio
    async def test_returns_result_on_success(self, config):
        func = AsyncMock(return_value="success")

        assert await with_retries(func, config) == "success"
        func.assert_called_once()

    @pytest.mark.asyncio
    async def test_succeeds_after_transient_error(self, config):
        func = AsyncMock(side_effect=[TransientError("temporary"), "success"])

        with patch(_PATCH_SLEEP, new_callable=AsyncMock):
            result = await with_retries(func, config)

        assert result == "success"
        assert func.call_count == 2


class TestWithRetriesFailure:
    """Exhausted and non-retryable failures."""

    @pytest.mark.asyncio
    async def test_raises_last_error_after_max_retries(self, config):
        func = AsyncMock(side_effect=TransientError("still down"))

        with (
            patch(_PATCH_SLEEP, new_callable=AsyncMock) as mock_sleep,
            pytest.raises(TransientError, match="still down"),
        ):
            await with_retries(func, config)

        assert func.call_count == 4
        assert mock_sleep.await_count == 3

    @pytest.mark.asyncio
    async def test_non_retryable_error_fails_immediately(self, config):
        func = AsyncMock(side_effect=AuthenticationError("bad key"))

        with pytest.raises(AuthenticationError):
            await with_retries(func, config)

        func.assert_called_once()

    @pytest.mark.asyncio
    async def test_zero_retries_calls_once(self):
        func = AsyncMock(side_effect=RateLimitError("quota"))

        with pytest.raises(RateLimitError):
            await with_retries(func, ProviderConfig(max_retries=0))

        func.assert_called_once()


class TestBackoff:
    """Delay calculation."""

    def test_retry_after_hint_overrides_backoff(self, config):
        error = RateLimitError("slow down", retry_after_seconds=7.5)

        assert _backoff_seconds(0, error, config) == 7.5

    def test_delay_grows_exponentially(self, config):
        error = TransientError("x")

        first = _backoff_seconds(0, error, config)
        second = _backoff_seconds(1, error, config)

        assert 0.1 <= first <= 0.11
        assert 0.2 <= second <= 0.22

    def test_delay_is_capped(self, config):
        assert _backoff_seconds(10, TransientError("x"), config) == 1.0
