"""Mock LLM provider for tests and offline runs."""

from typing import Any

import structlog

from wigu.providers.errors import ProviderError
from wigu.providers.llm.base import LLMMessage, LLMProvider, LLMResponse, TaskType

logger = structlog.get_logger()


class MockLLMProvider(LLMProvider):
    """Deterministic provider returning canned responses.

    Attributes:
        responses: Pre-configured responses keyed by TaskType.
        errors: Pre-configured errors keyed by TaskType (raised instead of
            returning a response).
        calls: Record of all invocations for test assertions.
        last_task: The most recent TaskType used in a call.
    """

    @property
    def provider_name(self) -> str:
        """Return 'mock'."""
        return "mock"

    def __init__(self, responses: dict[TaskType, str] | None = None) -> None:
        """Initialize mock provider with optional pre-configured responses.

        Args:
            responses: Dict mapping TaskType to response content. Tasks
                without a response get an empty JSON object.
        """
        self.responses: dict[TaskType, str] = dict(responses) if responses else {}
        self.errors: dict[TaskType, ProviderError] = {}
        self.calls: list[dict[str, Any]] = []
        self.last_task: TaskType | None = None

    def set_response(self, task: TaskType, content: str) -> None:
        """Set or update the response for a specific task type."""
        self.responses[task] = content

    def set_error(self, task: TaskType, error: ProviderError) -> None:
        """Make calls for a task type raise the given error."""
        self.errors[task] = error

    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Record the call and return the configured response.

        Raises:
            ProviderError: If an error was configured for the task.
        """
        self.calls.append(
            {
                "messages": messages,
                "task": task,
                "kwargs": {"json_mode": json_mode},
            }
        )
        self.last_task = task

        if task in self.errors:
            logger.info("llm_request_failed", provider="mock", task=task.value)
            raise self.errors[task]

        content = self.responses.get(task, "{}")
        logger.debug("llm_request_complete", provider="mock", task=task.value)

        return LLMResponse(
            content=content,
            model="mock-model",
            input_tokens=sum(len(m.content.split()) for m in messages),
            output_tokens=len(content.split()),
            finish_reason="stop",
            latency_ms=0.0,
        )
