"""Provider factory functions.

One process-wide LLM provider, created lazily from settings. Tests swap
it with set_llm_provider() and restore isolation with reset_providers().
"""

import structlog

from wigu.core.config import settings
from wigu.providers.llm.base import LLMProvider
from wigu.providers.llm.mock_adapter import MockLLMProvider

logger = structlog.get_logger()

_llm_provider: LLMProvider | None = None


def get_llm_provider() -> LLMProvider:
    """Get or create the LLM provider singleton.

    Returns:
        LLMProvider instance.

    Raises:
        ValueError: If the configured provider is unknown.
    """
    global _llm_provider

    if _llm_provider is None:
        if settings.llm_provider == "mock":
            _llm_provider = MockLLMProvider()
        else:
            raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
        logger.info("llm_provider_created", provider=_llm_provider.provider_name)

    return _llm_provider


def set_llm_provider(provider: LLMProvider) -> None:
    """Install a specific provider instance (e.g., a configured mock)."""
    global _llm_provider
    _llm_provider = provider


def reset_providers() -> None:
    """Reset provider singletons.

    Used in tests to ensure isolation between test cases.
    """
    global _llm_provider
    _llm_provider = None
