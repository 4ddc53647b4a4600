"""Provider error taxonomy.

Adapters map SDK exceptions onto these classes so callers can tell
retryable failures from configuration problems without knowing which
provider is behind the interface.
"""


__all__ = [
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ContentFilterError",
    "ContextLengthError",
    "TransientError",
]


class ProviderError(Exception):
    """Base class for all provider errors."""

    pass


class RateLimitError(ProviderError):
    """Rate limit or quota exceeded.

    May carry a retry_after_seconds hint from the provider.
    """

    def __init__(self, message: str, retry_after_seconds: float | None = None):
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class AuthenticationError(ProviderError):
    """Invalid or missing API key. Not retryable."""

    pass


class ContentFilterError(ProviderError):
    """Content blocked by the provider's safety filter."""

    pass


class ContextLengthError(ProviderError):
    """Input exceeded the model's context window."""

    pass


class TransientError(ProviderError):
    """Temporary failure: network error, timeout or 5xx. Safe to retry."""

    pass
