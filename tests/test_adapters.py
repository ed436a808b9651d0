"""
Test suite for the Gemini and Pinecone adapters.

HTTP calls are served by httpx.MockTransport; the OpenAI-compatible client
is replaced with AsyncMock objects.
"""

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from devverse_rag.core.exceptions import ConfigurationError, InvalidResponseError
from devverse_rag.core.models.document import VectorRecord
from devverse_rag.infrastructure.embeddings.gemini_embedder import GeminiEmbedder
from devverse_rag.infrastructure.llm.gemini_client import (
    GeminiChatModel,
    GeminiClient,
    describe_model,
)
from devverse_rag.infrastructure.vector_stores.pinecone_index import PineconeVectorIndex


def embedding_client(response) -> MagicMock:
    client = MagicMock()
    client.embeddings.create = AsyncMock(return_value=response)
    return client


class TestGeminiEmbedder:
    """Test suite for GeminiEmbedder."""

    @pytest.mark.asyncio
    async def test_missing_key_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            await GeminiEmbedder(api_key=None).embed("text")

    @pytest.mark.asyncio
    async def test_returns_embedding_values(self) -> None:
        embedder = GeminiEmbedder(api_key="key", model="text-embedding-004")
        client = embedding_client(SimpleNamespace(data=[SimpleNamespace(embedding=[0.5, 0.25])]))
        embedder.__dict__["client"] = client

        assert await embedder.embed("hello") == [0.5, 0.25]
        client.embeddings.create.assert_awaited_once_with(
            model="text-embedding-004", input="hello"
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            SimpleNamespace(data=[]),
            SimpleNamespace(data=None),
            SimpleNamespace(data=[SimpleNamespace(embedding=None)]),
            SimpleNamespace(data=[SimpleNamespace(embedding="not-a-list")]),
        ],
    )
    async def test_malformed_payload_raises(self, response) -> None:
        embedder = GeminiEmbedder(api_key="key")
        embedder.__dict__["client"] = embedding_client(response)

        with pytest.raises(InvalidResponseError):
            await embedder.embed("hello")

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            await GeminiEmbedder(api_key="key").embed("   ")


class TestDescribeModel:
    """Test suite for model listing entries."""

    def test_flash_chat_model(self) -> None:
        descriptor = describe_model(
            {"name": "models/gemini-2.0-flash", "supportedGenerationMethods": ["generateContent"]}
        )

        assert descriptor.supports_generation
        assert not descriptor.is_embedding_model
        assert descriptor.cost_tier == "flash"
        assert descriptor.family == "gemini"

    def test_pro_model(self) -> None:
        assert describe_model({"name": "models/gemini-2.5-pro-preview"}).cost_tier == "pro"

    def test_embedding_model(self) -> None:
        descriptor = describe_model(
            {"name": "models/text-embedding-004", "supportedGenerationMethods": ["embedContent"]}
        )

        assert descriptor.is_embedding_model
        assert not descriptor.supports_generation

    def test_missing_methods_count_as_generation_capable(self) -> None:
        assert describe_model({"name": "models/gemini-1.5-flash-lite"}).supports_generation


class TestGeminiClient:
    """Test suite for model listing and chat handles."""

    @pytest.mark.asyncio
    async def test_lists_models_across_pages(self) -> None:
        pages = {
            None: {"models": [{"name": "models/gemini-2.0-flash"}], "nextPageToken": "p2"},
            "p2": {"models": [{"name": "models/gemini-2.5-pro"}]},
        }
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.url.params.get("key"))
            return httpx.Response(200, json=pages[request.url.params.get("pageToken")])

        client = GeminiClient(api_key="secret", transport=httpx.MockTransport(handler))

        descriptors = await client.list_models()

        assert [d.name for d in descriptors] == ["models/gemini-2.0-flash", "models/gemini-2.5-pro"]
        assert seen == ["secret", "secret"]

    @pytest.mark.asyncio
    async def test_listing_failure_raises(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(403, json={}))
        client = GeminiClient(api_key="secret", transport=transport)

        with pytest.raises(httpx.HTTPStatusError):
            await client.list_models()

    @pytest.mark.asyncio
    async def test_listing_requires_key(self) -> None:
        with pytest.raises(ConfigurationError):
            await GeminiClient(api_key=None).list_models()

    @pytest.mark.asyncio
    async def test_chat_model_generates_with_short_name(self) -> None:
        openai_client = MagicMock()
        openai_client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(
                choices=[SimpleNamespace(message=SimpleNamespace(content="Answer [1]."))]
            )
        )
        model = GeminiChatModel(openai_client, "models/gemini-2.0-flash", temperature=0.2)

        assert await model.generate("prompt") == "Answer [1]."
        kwargs = openai_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gemini-2.0-flash"
        assert kwargs["messages"] == [{"role": "user", "content": "prompt"}]
        assert kwargs["temperature"] == 0.2

    @pytest.mark.asyncio
    async def test_chat_model_rejects_empty_content(self) -> None:
        openai_client = MagicMock()
        openai_client.chat.completions.create = AsyncMock(
            return_value=SimpleNamespace(
                choices=[SimpleNamespace(message=SimpleNamespace(content=None))]
            )
        )

        with pytest.raises(InvalidResponseError):
            await GeminiChatModel(openai_client, "models/gemini-2.0-flash").generate("p")


class TestPineconeVectorIndex:
    """Test suite for the Pinecone HTTP adapter."""

    @pytest.mark.asyncio
    async def test_resolves_host_once_and_queries(self) -> None:
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.host == "api.pinecone.io":
                return httpx.Response(200, json={"host": "articles-abc.svc.pinecone.io"})
            return httpx.Response(
                200,
                json={
                    "matches": [
                        {"id": "rag#0", "score": 0.9, "metadata": {"title": "RAG"}},
                        {"id": "rag#1", "score": 0.8},
                    ]
                },
            )

        index = PineconeVectorIndex(
            api_key="pc-key", index_name="devverse-articles", transport=httpx.MockTransport(handler)
        )

        first = await index.query([0.1, 0.2], top_k=2)
        await index.query([0.1, 0.2], top_k=2)

        assert [m.id for m in first] == ["rag#0", "rag#1"]
        assert first[0].metadata == {"title": "RAG"}
        assert first[1].metadata == {}
        assert [r.url.host for r in requests] == [
            "api.pinecone.io",
            "articles-abc.svc.pinecone.io",
            "articles-abc.svc.pinecone.io",
        ]
        assert requests[0].url.path == "/indexes/devverse-articles"
        assert requests[1].headers["Api-Key"] == "pc-key"
        assert json.loads(requests[1].content) == {
            "vector": [0.1, 0.2],
            "topK": 2,
            "includeMetadata": True,
            "includeValues": False,
        }

    @pytest.mark.asyncio
    async def test_upsert_posts_vectors(self) -> None:
        bodies = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append((request.url.path, json.loads(request.content)))
            return httpx.Response(200, json={"upsertedCount": 1})

        index = PineconeVectorIndex(
            api_key="pc-key", host="idx.pinecone.io", transport=httpx.MockTransport(handler)
        )
        record = VectorRecord(id="rag#0", values=[0.1], metadata={"slug": "rag"})

        await index.upsert([record])

        assert bodies == [
            (
                "/vectors/upsert",
                {"vectors": [{"id": "rag#0", "values": [0.1], "metadata": {"slug": "rag"}}]},
            )
        ]

    @pytest.mark.asyncio
    async def test_empty_upsert_makes_no_request(self) -> None:
        transport = httpx.MockTransport(lambda request: pytest.fail("unexpected request"))
        index = PineconeVectorIndex(api_key="pc-key", host="idx", transport=transport)

        await index.upsert([])

    @pytest.mark.asyncio
    async def test_missing_key_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            await PineconeVectorIndex(api_key=None, host="idx").query([0.1])

    @pytest.mark.asyncio
    async def test_server_errors_propagate(self) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        index = PineconeVectorIndex(api_key="pc-key", host="idx", transport=transport)

        with pytest.raises(httpx.HTTPStatusError):
            await index.query([0.1])
