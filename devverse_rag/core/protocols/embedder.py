"""Embedder protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding service."""

    async def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: Non-empty text to embed.

        Returns:
            Fixed-dimension embedding vector.

        Raises:
            ConfigurationError: Credentials are missing.
            InvalidResponseError: Backend returned no usable vector.
        """
        ...
