"""Google Gemini LLM adapter.

Uses the unified google-genai SDK. Every request is bounded by
ProviderConfig.request_timeout_seconds; expiry is reported as a
TransientError so callers can retry.
"""

import asyncio
import time
from typing import TYPE_CHECKING

import structlog
from google import genai
from google.genai import types

from app.providers.errors import (
    AuthenticationError,
    ContentFilterError,
    ContextLengthError,
    ProviderError,
    RateLimitError,
    TransientError,
)
from app.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)

if TYPE_CHECKING:
    from app.providers.config import ProviderConfig

logger = structlog.get_logger()

# Fallback if task type not in routing table
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash"

DEFAULT_GEMINI_ROUTING: dict[str, str] = {
    "job_description": DEFAULT_GEMINI_MODEL,
    "career_assistant": DEFAULT_GEMINI_MODEL,
}


def _classify_gemini_error(error: Exception) -> ProviderError:
    """Map Gemini exceptions to internal error taxonomy."""
    error_msg = str(error).lower()
    if ("resource" in error_msg and "exhausted" in error_msg) or "quota" in error_msg:
        return RateLimitError(str(error))
    if (
        "permission" in error_msg
        or "unauthenticated" in error_msg
        or "api key" in error_msg
    ):
        return AuthenticationError(str(error))
    if "context" in error_msg or "token" in error_msg:
        return ContextLengthError(str(error))
    if "safety" in error_msg or "blocked" in error_msg:
        return ContentFilterError(str(error))
    if (
        "unavailable" in error_msg
        or "overloaded" in error_msg
        or "503" in error_msg
    ):
        return TransientError(str(error))
    return ProviderError(str(error))


def _convert_gemini_messages(
    messages: list[LLMMessage],
) -> tuple[str | None, list[types.Content]]:
    """Convert LLMMessages to Gemini format, extracting system instruction."""
    system_instruction = None
    contents: list[types.Content] = []

    for msg in messages:
        if msg.role == "system":
            system_instruction = msg.content
        else:
            role = "model" if msg.role == "assistant" else msg.role
            contents.append(
                types.Content(role=role, parts=[types.Part(text=msg.content)])
            )

    return system_instruction, contents


def _parse_gemini_response(response: object) -> tuple[str | None, str]:
    """Parse Gemini response into content and finish_reason."""
    if not response.candidates:  # type: ignore[attr-defined]
        return None, "UNKNOWN"

    candidate = response.candidates[0]  # type: ignore[attr-defined]
    content = None
    if candidate.content and candidate.content.parts:
        texts = [part.text for part in candidate.content.parts if part.text]
        content = "".join(texts) or None
    finish_reason = (
        candidate.finish_reason.name if candidate.finish_reason else "UNKNOWN"
    )
    return content, finish_reason


class GeminiAdapter(LLMProvider):
    """Google Gemini adapter using the unified google-genai SDK."""

    @property
    def provider_name(self) -> str:
        return "gemini"

    def __init__(self, config: "ProviderConfig") -> None:
        """Initialize Gemini adapter.

        Args:
            config: Provider configuration with Google API key.
        """
        super().__init__(config)
        self.client = genai.Client(api_key=config.google_api_key)
        self.model_routing = {**DEFAULT_GEMINI_ROUTING}
        if config.gemini_model_routing:
            self.model_routing.update(config.gemini_model_routing)

    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        max_tokens: int | None = None,
        temperature: float | None = None,
        stop_sequences: list[str] | None = None,
    ) -> LLMResponse:
        """Generate completion using Gemini."""
        model_name = self.get_model_for_task(task)
        system_instruction, contents = _convert_gemini_messages(messages)

        gen_config = types.GenerateContentConfig(
            max_output_tokens=max_tokens or self.config.default_max_tokens,
            temperature=(
                temperature
                if temperature is not None
                else self.config.default_temperature
            ),
            stop_sequences=stop_sequences or [],
            system_instruction=system_instruction,
        )

        logger.info(
            "llm_request_start",
            provider="gemini",
            model=model_name,
            task=task.value,
            message_count=len(messages),
        )

        start_time = time.monotonic()

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=model_name,
                    contents=contents,  # type: ignore[arg-type]
                    config=gen_config,
                ),
                timeout=self.config.request_timeout_seconds,
            )
        except TimeoutError as e:
            latency_ms = (time.monotonic() - start_time) * 1000
            logger.error(
                "llm_request_timeout",
                provider="gemini",
                model=model_name,
                task=task.value,
                latency_ms=latency_ms,
            )
            raise TransientError("Request timeout") from e
        except Exception as e:
            latency_ms = (time.monotonic() - start_time) * 1000
            logger.error(
                "llm_request_failed",
                provider="gemini",
                model=model_name,
                task=task.value,
                error=str(e),
                error_type=type(e).__name__,
                latency_ms=latency_ms,
            )
            raise _classify_gemini_error(e) from e

        latency_ms = (time.monotonic() - start_time) * 1000
        content, finish_reason = _parse_gemini_response(response)

        usage = response.usage_metadata
        input_tokens = (usage.prompt_token_count if usage else 0) or 0
        output_tokens = (usage.candidates_token_count if usage else 0) or 0

        logger.info(
            "llm_request_complete",
            provider="gemini",
            model=model_name,
            task=task.value,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            latency_ms=latency_ms,
        )

        return LLMResponse(
            content=content,
            model=model_name,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            finish_reason=finish_reason,
            latency_ms=latency_ms,
        )

    def get_model_for_task(self, task: TaskType) -> str:
        """Get model for task using routing table."""
        return self.model_routing.get(task.value, DEFAULT_GEMINI_MODEL)
