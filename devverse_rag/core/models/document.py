"""Document domain models."""
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Article:
    """Long-form article to be indexed."""
    slug: str
    title: str
    description: str
    topics: list[str] = field(default_factory=list)
    body: str = ""


@dataclass
class DocumentChunk:
    """One retrievable unit of an article, as stored in the vector index."""
    slug: str
    title: str
    description: str
    topics: list[str]
    url: str
    chunk_index: int
    content: str

    @property
    def id(self) -> str:
        return f"{self.slug}#{self.chunk_index}"

    @property
    def embed_text(self) -> str:
        """Text sent to the embedding model."""
        return f"{self.title}\n{self.description}\n\n{self.content}"

    def metadata(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "topics": list(self.topics),
            "url": self.url,
            "chunkIndex": self.chunk_index,
            "content": self.content,
        }


@dataclass
class VectorRecord:
    """Vector ready for upsert."""
    id: str
    values: list[float]
    metadata: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "values": self.values, "metadata": self.metadata}


@dataclass
class VectorMatch:
    """Raw nearest-neighbor match from the vector index."""
    id: str
    score: float
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class ChatSource:
    """Retrieved passage returned alongside an answer."""
    id: str
    score: float
    title: str
    url: str
    snippet: str
    chunk_index: int
    topics: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "score": self.score,
            "title": self.title,
            "url": self.url,
            "snippet": self.snippet,
            "chunkIndex": self.chunk_index,
            "topics": list(self.topics),
        }


@dataclass
class IngestReport:
    """Summary of one ingestion run."""
    documents: int = 0
    chunks: int = 0
    batches: int = 0
