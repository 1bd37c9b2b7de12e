"""Application configuration loaded from environment variables.

Uses pydantic-settings for validation and .env file support.
"""

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_THEME_MATCH_MODES = ("substring", "word_prefix")
_LLM_PROVIDERS = ("mock",)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="WIGU_",
    )

    # Application
    environment: str = "development"
    log_level: str = "INFO"

    # Theme extraction
    # "substring" reproduces the product's keyword matching (a trigger may
    # match inside a longer word). "word_prefix" anchors triggers to the
    # start of a word.
    theme_match_mode: str = "substring"

    # Synthesis classification
    # When enabled, bucket classification is delegated to the LLM provider
    # and falls back to the rule-based classifier on provider errors.
    synthesis_use_llm: bool = False
    llm_provider: str = "mock"

    @model_validator(mode="after")
    def check_known_values(self) -> "Settings":
        """Reject unknown enumerated settings.

        Checks:
        - Theme match mode must be a supported mode
        - LLM provider must be a registered provider
        """
        if self.theme_match_mode not in _THEME_MATCH_MODES:
            msg = (
                f"WIGU_THEME_MATCH_MODE must be one of {_THEME_MATCH_MODES}. "
                f"Got: {self.theme_match_mode}"
            )
            raise ValueError(msg)

        if self.llm_provider not in _LLM_PROVIDERS:
            msg = (
                f"WIGU_LLM_PROVIDER must be one of {_LLM_PROVIDERS}. "
                f"Got: {self.llm_provider}"
            )
            raise ValueError(msg)

        return self


settings = Settings()
