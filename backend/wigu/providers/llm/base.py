"""Abstract base class and types for LLM providers.

The scoring core treats generation as an opaque collaborator: it sends a
prompt and receives text (or JSON text) back, or a ProviderError.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class TaskType(Enum):
    """Generation tasks the core delegates to a provider."""

    SYNTHESIS_CLASSIFICATION = "synthesis_classification"


@dataclass
class LLMMessage:
    """Provider-agnostic message format.

    Attributes:
        role: Message role ("system", "user", "assistant").
        content: Text content.
    """

    role: str
    content: str


@dataclass
class LLMResponse:
    """Provider-agnostic response format.

    Attributes:
        content: Text response (None if the provider returned nothing).
        model: Actual model used (for logging).
        input_tokens: Number of input tokens used.
        output_tokens: Number of output tokens generated.
        finish_reason: Why generation stopped ("stop", "max_tokens").
        latency_ms: Response time in milliseconds.
    """

    content: str | None
    model: str
    input_tokens: int
    output_tokens: int
    finish_reason: str
    latency_ms: float


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider identifier (e.g., 'mock')."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[LLMMessage],
        task: TaskType,
        json_mode: bool = False,
    ) -> LLMResponse:
        """Generate a completion.

        Args:
            messages: Conversation history as list of LLMMessage.
            task: Task being performed.
            json_mode: If True, the reply must be a single JSON document.

        Returns:
            LLMResponse with the generated content.

        Raises:
            ProviderError: On provider failure.
        """
        ...
