"""Provider abstraction layer.

Exports:
    Error classes for provider error handling
    Factory functions for provider instances
"""

from wigu.providers.errors import (
    AuthenticationError,
    ProviderError,
    RateLimitError,
    TransientError,
)
from wigu.providers.factory import get_llm_provider, reset_providers, set_llm_provider

__all__ = [
    # Errors
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "TransientError",
    # Factory
    "get_llm_provider",
    "set_llm_provider",
    "reset_providers",
]
