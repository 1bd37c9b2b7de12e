"""Tests for application configuration.

Settings cover theme matching and synthesis classification switches.
"""

import pytest
from pydantic import ValidationError

from wigu.core.config import Settings


class TestSettingsDefaults:
    """Tests for default settings values."""

    def test_theme_match_mode_defaults_to_substring(self) -> None:
        """Substring matching is the default theme match mode."""
        assert Settings().theme_match_mode == "substring"

    def test_llm_classification_disabled_by_default(self) -> None:
        """Rule-based classification is used unless explicitly enabled."""
        s = Settings()
        assert s.synthesis_use_llm is False
        assert s.llm_provider == "mock"


class TestSettingsEnvironment:
    """Tests for loading settings from environment variables."""

    def test_reads_prefixed_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """WIGU_-prefixed variables populate settings."""
        monkeypatch.setenv("WIGU_THEME_MATCH_MODE", "word_prefix")
        monkeypatch.setenv("WIGU_SYNTHESIS_USE_LLM", "true")

        s = Settings()

        assert s.theme_match_mode == "word_prefix"
        assert s.synthesis_use_llm is True


class TestSettingsValidation:
    """Tests for rejecting unknown enumerated values."""

    def test_rejects_unknown_theme_match_mode(self) -> None:
        """Unknown match modes fail at load time."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(theme_match_mode="fuzzy")

        assert "WIGU_THEME_MATCH_MODE" in str(exc_info.value)

    def test_rejects_unknown_llm_provider(self) -> None:
        """Only registered providers are accepted."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(llm_provider="acme")

        assert "WIGU_LLM_PROVIDER" in str(exc_info.value)
