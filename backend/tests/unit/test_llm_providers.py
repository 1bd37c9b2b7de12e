"""Tests for the mock LLM provider and provider factory."""

import pytest

from wigu.core.config import Settings
from wigu.providers.errors import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    TransientError,
)
from wigu.providers.factory import get_llm_provider, reset_providers, set_llm_provider
from wigu.providers.llm.base import LLMMessage, TaskType
from wigu.providers.llm.mock_adapter import MockLLMProvider


class TestMockLLMProvider:
    """Tests for MockLLMProvider."""

    @pytest.mark.asyncio
    async def test_returns_configured_response(self) -> None:
        """Configured content is returned and the call is recorded."""
        provider = MockLLMProvider({TaskType.SYNTHESIS_CLASSIFICATION: '{"a": 1}'})
        messages = [LLMMessage(role="user", content="classify these")]

        response = await provider.complete(
            messages, TaskType.SYNTHESIS_CLASSIFICATION, json_mode=True
        )

        assert response.content == '{"a": 1}'
        assert provider.last_task == TaskType.SYNTHESIS_CLASSIFICATION
        assert provider.calls[0]["kwargs"]["json_mode"] is True

    @pytest.mark.asyncio
    async def test_defaults_to_empty_object(self) -> None:
        provider = MockLLMProvider()
        response = await provider.complete(
            [LLMMessage(role="user", content="hi")], TaskType.SYNTHESIS_CLASSIFICATION
        )
        assert response.content == "{}"

    @pytest.mark.asyncio
    async def test_raises_configured_error(self) -> None:
        """A configured error is raised instead of responding."""
        provider = MockLLMProvider()
        provider.set_error(TaskType.SYNTHESIS_CLASSIFICATION, TransientError("down"))

        with pytest.raises(TransientError):
            await provider.complete(
                [LLMMessage(role="user", content="hi")],
                TaskType.SYNTHESIS_CLASSIFICATION,
            )


class TestProviderFactory:
    """Tests for the provider singleton."""

    def test_creates_mock_by_default(self) -> None:
        provider = get_llm_provider()
        assert provider.provider_name == "mock"
        assert get_llm_provider() is provider

    def test_set_and_reset(self) -> None:
        """An installed provider is used until reset."""
        custom = MockLLMProvider()
        set_llm_provider(custom)
        assert get_llm_provider() is custom

        reset_providers()
        assert get_llm_provider() is not custom

    def test_unknown_provider_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """An unsupported provider name fails loudly."""
        monkeypatch.setattr(
            "wigu.providers.factory.settings",
            Settings.model_construct(llm_provider="unknown"),
        )

        with pytest.raises(ValueError, match="Unknown LLM provider"):
            get_llm_provider()


class TestProviderErrors:
    """Tests for the provider error hierarchy."""

    @pytest.mark.parametrize(
        "error",
        [
            RateLimitError("slow down"),
            AuthenticationError("bad key"),
            TransientError("503"),
        ],
    )
    def test_all_errors_are_provider_errors(self, error: ProviderError) -> None:
        """Callers fall back by catching ProviderError alone."""
        assert isinstance(error, ProviderError)

    def test_rate_limit_carries_retry_hint(self) -> None:
        error = RateLimitError("slow down", retry_after_seconds=2.5)
        assert error.retry_after_seconds == 2.5
        assert str(error) == "slow down"
