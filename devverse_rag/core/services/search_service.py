"""Search service - embeds the question and retrieves article passages."""

import logging
import re
from typing import Any, Optional

from ..models.document import ChatSource, VectorMatch
from ..protocols.embedder import EmbedderProtocol
from ..protocols.vector_store import VectorIndexProtocol

logger = logging.getLogger(__name__)

SNIPPET_MAX_LENGTH = 420

_WHITESPACE = re.compile(r"\s+")


def normalize_snippet(content: Any, max_length: int = SNIPPET_MAX_LENGTH) -> str:
    """Collapse whitespace, trim and truncate chunk text."""
    if not isinstance(content, str):
        return ""
    return _WHITESPACE.sub(" ", content).strip()[:max_length]


def _chunk_index(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return 0


def to_chat_source(match: VectorMatch) -> ChatSource:
    """Shape an index match into a chat source."""
    metadata = match.metadata or {}
    title = metadata.get("title")
    url = metadata.get("url")
    topics = metadata.get("topics")

    return ChatSource(
        id=str(match.id),
        score=match.score if match.score is not None else 0.0,
        title=title if isinstance(title, str) else "Untitled",
        url=url if isinstance(url, str) else "",
        snippet=normalize_snippet(metadata.get("content")),
        chunk_index=_chunk_index(metadata.get("chunkIndex")),
        topics=[t for t in topics if isinstance(t, str)] if isinstance(topics, list) else [],
    )


class SearchService:
    """Nearest-neighbor retrieval over embedded article chunks."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        vector_index: VectorIndexProtocol,
        top_k: int = 6,
    ):
        """Initialize search service.

        Args:
            embedder: Embedding service.
            vector_index: Vector index.
            top_k: Default number of sources.
        """
        self._embedder = embedder
        self._vector_index = vector_index
        self._top_k = top_k

    async def retrieve(self, query: str, limit: Optional[int] = None) -> list[ChatSource]:
        """Retrieve the passages most similar to a query.

        Results keep the index's similarity order. Chunks from the same
        article are not deduplicated. Errors propagate to the caller.

        Args:
            query: Search query.
            limit: Override number of results.

        Returns:
            Chat sources, most relevant first.
        """
        if limit is None:
            limit = self._top_k

        query_embedding = await self._embedder.embed(query)
        matches = await self._vector_index.query(
            vector=query_embedding, top_k=limit, include_metadata=True
        )

        sources = [to_chat_source(m) for m in matches]
        logger.info(f"Search: returned {len(sources)}/{limit} sources for '{query[:50]}...'")
        return sources
