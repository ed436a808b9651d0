"""Protocol interfaces for dependency injection."""
from .embedder import EmbedderProtocol
from .vector_store import VectorIndexProtocol
from .llm import GenerativeModelProtocol, LLMProtocol

__all__ = [
    "EmbedderProtocol",
    "VectorIndexProtocol",
    "GenerativeModelProtocol",
    "LLMProtocol",
]
