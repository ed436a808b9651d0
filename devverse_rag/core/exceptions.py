"""Exception hierarchy for the article assistant.

Every error raised by the retrieval, generation and ingestion layers derives
from ``RagError`` so the request boundary can map them in one place.
"""

from typing import Any, Optional


class RagError(Exception):
    """Base exception for all article assistant errors."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        """Initialize base exception.

        Args:
            message: Human-readable error message.
            details: Optional context for debugging.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(RagError):
    """Raised when a required credential or setting is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"{setting} is not configured", {"setting": setting})
        self.setting = setting


class InvalidResponseError(RagError):
    """Raised when an upstream API returns a payload we cannot parse."""


class QuotaExceededError(RagError):
    """Raised when the embedding provider reports a quota or billing problem."""


class RetryableTransientError(RagError):
    """Rate limit or server-side failure that is worth retrying."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message, {"status": status} if status is not None else None)
        self.status = status


class RetryExhaustedError(RagError):
    """Raised when the embedding retry loop gives up on a document."""

    def __init__(self, slug: str, attempts: int) -> None:
        super().__init__(
            "Embedding retry loop exhausted.",
            {"slug": slug, "attempts": attempts},
        )
        self.slug = slug
        self.attempts = attempts


class NoModelsAvailableError(RagError):
    """Raised when no listed model qualifies as a chat model."""

    def __init__(self, message: str = "No suitable Gemini chat models found.") -> None:
        super().__init__(message)


class AllModelsFailedError(RagError):
    """Raised when every model in the fallback chain failed."""

    def __init__(self, attempted: list[str]) -> None:
        super().__init__(
            "All Gemini models failed to generate content.",
            {"attempted": attempted},
        )
        self.attempted = attempted


class ServiceUnavailableError(RagError):
    """Raised when a chat request exceeds its deadline."""
