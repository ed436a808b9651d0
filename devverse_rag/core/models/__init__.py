"""Domain models."""
from .document import (
    Article,
    ChatSource,
    DocumentChunk,
    IngestReport,
    VectorMatch,
    VectorRecord,
)
from .chat import ChatMessage, ChatResponse, ChatRole
from .model import ModelDescriptor

__all__ = [
    "Article",
    "ChatSource",
    "DocumentChunk",
    "IngestReport",
    "VectorMatch",
    "VectorRecord",
    "ChatMessage",
    "ChatResponse",
    "ChatRole",
    "ModelDescriptor",
]
