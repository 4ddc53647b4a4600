"""Retry helper for provider calls.

Exponential backoff with jitter for transient and rate-limit failures.
A RateLimitError carrying retry_after_seconds overrides the backoff.
"""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, TypeVar

from app.providers.errors import RateLimitError, TransientError

__all__ = ["with_retries"]

if TYPE_CHECKING:
    from app.providers.config import ProviderConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _backoff_seconds(attempt: int, error: Exception, config: "ProviderConfig") -> float:
    if isinstance(error, RateLimitError) and error.retry_after_seconds:
        return error.retry_after_seconds
    base_delay = config.retry_base_delay_ms * (2**attempt)
    jitter = random.uniform(0, base_delay * 0.1)
    return min(base_delay + jitter, config.retry_max_delay_ms) / 1000


async def with_retries(
    func: Callable[[], Awaitable[T]],
    config: "ProviderConfig",
    retryable_errors: tuple[type[Exception], ...] = (TransientError, RateLimitError),
) -> T:
    """Run func, retrying retryable errors up to config.max_retries times.

    Args:
        func: Async function to execute (no arguments).
        config: Provider configuration with retry settings.
        retryable_errors: Error types that trigger a retry.

    Returns:
        Result from the first successful call.

    Raises:
        The last retryable error once retries are exhausted. Non-retryable
        errors propagate immediately.
    """
    attempts = config.max_retries + 1
    for attempt in range(attempts):
        try:
            return await func()
        except retryable_errors as e:
            if attempt == attempts - 1:
                raise
            delay = _backoff_seconds(attempt, e, config)
            logger.warning(
                "Provider error (attempt %d/%d): %s. Retrying in %.2fs",
                attempt + 1,
                attempts,
                e,
                delay,
            )
            await asyncio.sleep(delay)

    raise RuntimeError("Retry loop exited without error or result")
