"""Provider error taxonomy.

Adapters map vendor failures onto these classes so callers can fall back
or retry without knowing which provider is configured.
"""


__all__ = [
    "ProviderError",
    "RateLimitError",
    "AuthenticationError",
    "TransientError",
]


class ProviderError(Exception):
    """Base class for all provider errors.

    Catching ProviderError covers every failure of the generation step.
    """

    pass


class RateLimitError(ProviderError):
    """Rate limit exceeded."""

    def __init__(self, message: str, retry_after_seconds: float | None = None):
        """Initialize RateLimitError.

        Args:
            message: Error description from the provider.
            retry_after_seconds: Optional hint from provider on when to retry.
        """
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class AuthenticationError(ProviderError):
    """Invalid or expired credentials. Not retryable."""

    pass


class TransientError(ProviderError):
    """Temporary failure (network, server overload). Safe to retry."""

    pass
