"""LLM provider interface and adapters."""

from wigu.providers.llm.base import LLMMessage, LLMProvider, LLMResponse, TaskType
from wigu.providers.llm.mock_adapter import MockLLMProvider

__all__ = [
    # Base types
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "TaskType",
    # Adapters
    "MockLLMProvider",
]
