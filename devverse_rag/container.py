import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def is_registered(self, interface: type) -> bool:
        return interface in self._factories

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.llm import LLMProtocol
    from .core.protocols.vector_store import VectorIndexProtocol
    from .core.services.chat_service import ChatService
    from .core.services.chunker import DocumentChunker
    from .core.services.ingest_service import IngestService
    from .core.services.model_pool import ModelPool
    from .core.services.search_service import SearchService
    from .infrastructure.embeddings.gemini_embedder import GeminiEmbedder
    from .infrastructure.llm.gemini_client import GeminiClient
    from .infrastructure.vector_stores.pinecone_index import PineconeVectorIndex

    container.register(
        EmbedderProtocol,
        lambda: GeminiEmbedder(
            api_key=settings.google_ai_api_key,
            model=settings.embedding_model,
            base_url=settings.gemini_openai_url,
        ),
        singleton=True,
    )

    container.register(
        VectorIndexProtocol,
        lambda: PineconeVectorIndex(
            api_key=settings.pinecone_api_key,
            index_name=settings.pinecone_index,
            host=settings.pinecone_host,
            control_url=settings.pinecone_control_url,
            timeout=settings.http_timeout_seconds,
        ),
        singleton=True,
    )

    container.register(
        LLMProtocol,
        lambda: GeminiClient(
            api_key=settings.google_ai_api_key,
            api_url=settings.gemini_api_url,
            openai_url=settings.gemini_openai_url,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.http_timeout_seconds,
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            embedder=container.resolve(EmbedderProtocol),
            vector_index=container.resolve(VectorIndexProtocol),
            top_k=settings.rag_top_k,
        ),
        singleton=True,
    )

    container.register(
        ModelPool,
        lambda: ModelPool(
            llm=container.resolve(LLMProtocol),
            family=settings.chat_model_family,
            excluded_cost_tiers=settings.excluded_cost_tiers,
            ttl_seconds=settings.model_list_ttl_seconds,
        ),
        singleton=True,
    )

    container.register(
        ChatService,
        lambda: ChatService(
            search_service=container.resolve(SearchService),
            model_pool=container.resolve(ModelPool),
            top_k=settings.rag_top_k,
            timeout_seconds=settings.chat_timeout_seconds,
        ),
        singleton=True,
    )

    container.register(
        IngestService,
        lambda: IngestService(
            embedder=container.resolve(EmbedderProtocol),
            vector_index=container.resolve(VectorIndexProtocol),
            content_dir=settings.content_dir,
            site_url=settings.site_url,
            chunker=DocumentChunker(settings.chunk_max_length),
            batch_size=settings.vectorize_batch_size,
            max_retries=settings.vectorize_max_retries,
            retry_base_ms=settings.vectorize_retry_base_ms,
            retry_jitter_ms=settings.vectorize_retry_jitter_ms,
            embed_delay_ms=settings.vectorize_embed_delay_ms,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
