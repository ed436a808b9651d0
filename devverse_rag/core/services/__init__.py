"""Core business services."""
from .chunker import DocumentChunker
from .search_service import SearchService
from .model_pool import ModelPool
from .chat_service import ChatService
from .ingest_service import IngestService

__all__ = [
    "DocumentChunker",
    "SearchService",
    "ModelPool",
    "ChatService",
    "IngestService",
]
