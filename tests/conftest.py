"""
Shared test fixtures and fakes.

Provides in-memory stand-ins for the embedder, vector index and generative
model provider so services can be exercised without network access.
"""

from typing import Optional

import pytest

from devverse_rag.core.models.document import ChatSource, VectorMatch, VectorRecord
from devverse_rag.core.models.model import ModelDescriptor


class FakeAPIError(Exception):
    """SDK-style error carrying an optional HTTP status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code


class FakeEmbedder:
    """Embedder returning a fixed vector, optionally failing first."""

    def __init__(self, vector=None, errors=None, always_raise=None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.calls: list[str] = []
        self._errors = list(errors or [])
        self._always_raise = always_raise

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self._always_raise is not None:
            raise self._always_raise
        if self._errors:
            error = self._errors.pop(0)
            if error is not None:
                raise error
        return list(self.vector)


class FakeVectorIndex:
    """Vector index recording upserts and serving canned matches."""

    def __init__(self, matches=None):
        self.matches: list[VectorMatch] = list(matches or [])
        self.batches: list[list[VectorRecord]] = []
        self.queries: list[dict] = []

    @property
    def records(self) -> list[VectorRecord]:
        return [r for batch in self.batches for r in batch]

    async def upsert(self, records: list[VectorRecord]) -> None:
        self.batches.append(list(records))

    async def query(self, vector, top_k=6, include_metadata=True):
        self.queries.append(
            {"vector": vector, "top_k": top_k, "include_metadata": include_metadata}
        )
        return self.matches[:top_k]


class FakeModel:
    """Generative model handle that succeeds or raises."""

    def __init__(self, name: str, outcome, log: Optional[list] = None):
        self.name = name
        self._outcome = outcome
        self._log = log if log is not None else []
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        self._log.append(self.name)
        if isinstance(self._outcome, BaseException):
            raise self._outcome
        return self._outcome


class FakeLLM:
    """Provider with a fixed model listing."""

    def __init__(self, outcomes: dict, descriptors=None):
        self.log: list[str] = []
        self.models = {
            name: FakeModel(name, outcome, self.log) for name, outcome in outcomes.items()
        }
        self.descriptors = descriptors or [gemini(name) for name in outcomes]
        self.list_calls = 0
        self.get_model_calls: list[str] = []

    async def list_models(self):
        self.list_calls += 1
        return list(self.descriptors)

    def get_model(self, name: str):
        self.get_model_calls.append(name)
        return self.models[name]


def gemini(name: str, **overrides) -> ModelDescriptor:
    """Eligible chat model descriptor, with overrides."""
    fields = {
        "name": name,
        "supports_generation": True,
        "is_embedding_model": False,
        "cost_tier": "flash",
        "family": "gemini",
    }
    fields.update(overrides)
    return ModelDescriptor(**fields)


@pytest.fixture
def rag_sources() -> list[ChatSource]:
    """Two sources in similarity order."""
    return [
        ChatSource(
            id="rag-basics#0",
            score=0.9,
            title="RAG Basics",
            url="https://devverse-swe.vercel.app/articles/rag-basics",
            snippet="Retrieval-augmented generation grounds answers in documents.",
            chunk_index=0,
            topics=["ai"],
        ),
        ChatSource(
            id="vector-search-101#2",
            score=0.8,
            title="Vector Search 101",
            url="https://devverse-swe.vercel.app/articles/vector-search-101",
            snippet="Nearest-neighbor search finds similar embeddings.",
            chunk_index=2,
            topics=["search", "ai"],
        ),
    ]
