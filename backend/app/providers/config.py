"""LLM provider configuration."""

import os
from dataclasses import dataclass


@dataclass
class ProviderConfig:
    """Centralized provider configuration.

    Attributes:
        llm_provider: Which LLM provider to use ("gemini" or "mock").
        google_api_key: Google AI API key (loaded from environment).
        gemini_model_routing: Override model routing for Gemini.
        default_max_tokens: Default max output tokens.
        default_temperature: Default sampling temperature.
        request_timeout_seconds: Bound on a single provider request.
        max_retries: Max retry attempts for transient errors.
        retry_base_delay_ms: Base delay for exponential backoff.
        retry_max_delay_ms: Max delay cap for exponential backoff.
    """

    # Provider selection
    llm_provider: str = "gemini"

    # API key (loaded from environment)
    google_api_key: str | None = None

    # Model routing (can override defaults)
    gemini_model_routing: dict[str, str] | None = None

    # Defaults
    default_max_tokens: int = 2048
    default_temperature: float = 0.7
    request_timeout_seconds: float = 30.0

    # Retry policy
    max_retries: int = 2
    retry_base_delay_ms: int = 1000
    retry_max_delay_ms: int = 10000

    @classmethod
    def from_env(cls) -> "ProviderConfig":
        """Load configuration from environment variables."""
        return cls(
            llm_provider=os.getenv("LLM_PROVIDER", "gemini"),
            google_api_key=os.getenv("GOOGLE_API_KEY"),
            default_max_tokens=int(os.getenv("DEFAULT_MAX_TOKENS", "2048")),
            default_temperature=float(os.getenv("DEFAULT_TEMPERATURE", "0.7")),
            request_timeout_seconds=float(os.getenv("LLM_REQUEST_TIMEOUT", "30")),
            max_retries=int(os.getenv("LLM_MAX_RETRIES", "2")),
        )
