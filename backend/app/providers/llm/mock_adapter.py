"""Mock LLM provider for tests and offline development."""

from typing import Any

from app.providers.config import ProviderConfig
from app.providers.llm.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TaskType,
)


class MockLLMProvider(LLMProvider):
    """Deterministic provider that records its calls.

    Attributes:
        responses: Pre-configured responses keyed by TaskType.
        error: If set, raised by every complete() call.
        calls: Record of all invocations for test assertions.
        last_task: The most recent TaskType used in a call.
    """

    @property
    def provider_name(self) -> str:
        return "mock"

    def __init__(
        self,
        responses: dict[TaskType, str] | None = None,
        error: Exception | None = None,
        config: ProviderConfig | None = None,
    ) -> None:
        """Initialize mock provider.

        Args:
            responses: Dict mapping TaskType to response content. Tasks not
                listed get "Mock response for {task}".
            error: Exception to raise instead of responding.
            config: Provider configuration. Defaults to no retries so
                simulated failures surface immediately.
        """
        super().__init__(config or ProviderConfig(llm_provider="mock", max_retries=0))
        self.responses: dict[TaskType, str] = dict(responses) if responses else {}
        self.error = error
        self.calls: list[dict[str, Any]] = []
        self.last_task: TaskType | None = None

    def set_response(self, task: TaskType, content: str) -> None:
        """Set or update the response for a specific task type."""
        self.responses[task] = content

    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        max_tokens: int | None = None,
        temperature: float | None = None,
        stop_sequences: list[str] | None = None,
    ) -> LLMResponse:
        """Record the call and return the configured response."""
        self.calls.append(
            {
                "messages": messages,
                "task": task,
                "kwargs": {
                    "max_tokens": max_tokens,
                    "temperature": temperature,
                    "stop_sequences": stop_sequences,
                },
            }
        )
        self.last_task = task

        if self.error is not None:
            raise self.error

        return LLMResponse(
            content=self.responses.get(task, f"Mock response for {task.value}"),
            model="mock-model",
            input_tokens=100,
            output_tokens=50,
            finish_reason="STOP",
            latency_ms=10,
        )

    def get_model_for_task(self, _task: TaskType) -> str:
        return "mock-model"

    def assert_called_with_task(self, task: TaskType) -> None:
        """Test helper to verify a task was called.

        Raises:
            AssertionError: If the task was not called.
        """
        tasks_called = [c["task"] for c in self.calls]
        assert task in tasks_called, f"Expected {task}, got {tasks_called}"
