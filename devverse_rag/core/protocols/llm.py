"""LLM protocols for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.model import ModelDescriptor


@runtime_checkable
class GenerativeModelProtocol(Protocol):
    """Handle for one named generative model."""

    name: str

    async def generate(self, prompt: str) -> str:
        """Generate a completion for a single prompt.

        Args:
            prompt: Fully assembled prompt.

        Returns:
            Raw answer text.
        """
        ...


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for a generative model provider."""

    async def list_models(self) -> list[ModelDescriptor]:
        """List models offered by the provider, in provider order."""
        ...

    def get_model(self, name: str) -> GenerativeModelProtocol:
        """Create a handle for the named model."""
        ...
