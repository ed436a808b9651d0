"""Ingest service - article vectorization."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)

from ..exceptions import QuotaExceededError, RetryExhaustedError
from ..models.document import Article, DocumentChunk, IngestReport, VectorRecord
from ..protocols.embedder import EmbedderProtocol
from ..protocols.vector_store import VectorIndexProtocol
from ..strategies.error_classification import ErrorKind, classify_exception
from .chunker import DocumentChunker

logger = logging.getLogger(__name__)


class IngestService:
    """Service for chunking, embedding and upserting articles."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        vector_index: VectorIndexProtocol,
        content_dir: str = "./content",
        site_url: str = "https://devverse-swe.vercel.app",
        chunker: Optional[DocumentChunker] = None,
        batch_size: int = 40,
        max_retries: int = 6,
        retry_base_ms: int = 1000,
        retry_jitter_ms: int = 250,
        embed_delay_ms: int = 250,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """Initialize ingest service.

        Args:
            embedder: Embedding service.
            vector_index: Vector index.
            content_dir: Folder with MDX articles.
            site_url: Base URL used to build article links.
            chunker: Document chunker.
            batch_size: Records per upsert.
            max_retries: Retries per embedding call after the first attempt.
            retry_base_ms: Base backoff delay.
            retry_jitter_ms: Maximum random jitter added to each backoff.
            embed_delay_ms: Fixed pause after each successful embedding.
            sleep: Async sleep function, in seconds.
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self._embedder = embedder
        self._vector_index = vector_index
        self._content_dir = content_dir
        self._site_url = site_url.rstrip("/")
        self._chunker = chunker or DocumentChunker()
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._embed_delay_ms = embed_delay_ms
        self._sleep = sleep
        self._retry_base_ms = retry_base_ms
        self._retry_jitter_ms = retry_jitter_ms

        self._loader = None

    @property
    def loader(self):
        """Lazy load article loader."""
        if self._loader is None:
            from devverse_rag.infrastructure.document_loaders import MdxArticleLoader

            self._loader = MdxArticleLoader(self._content_dir)
        return self._loader

    def article_url(self, slug: str) -> str:
        return f"{self._site_url}/articles/{slug}"

    def build_chunks(self, article: Article) -> list[DocumentChunk]:
        """Chunk an article and attach index metadata."""
        return [
            DocumentChunk(
                slug=article.slug,
                title=article.title,
                description=article.description,
                topics=list(article.topics),
                url=self.article_url(article.slug),
                chunk_index=i,
                content=text,
            )
            for i, text in enumerate(self._chunker.chunk(article.body))
        ]

    async def embed_with_retry(self, text: str, slug: str) -> list[float]:
        """Embed text, backing off on rate limits and server errors.

        Args:
            text: Text to embed.
            slug: Article slug, for error context.

        Returns:
            Embedding vector.

        Raises:
            QuotaExceededError: Quota or billing failure, never retried.
            RetryExhaustedError: Retryable failures outlasted max_retries.
        """
        retrying = AsyncRetrying(
            retry=retry_if_exception(
                lambda e: classify_exception(e) is ErrorKind.RETRYABLE
            ),
            stop=stop_after_attempt(self._max_retries + 1),
            wait=wait_exponential(multiplier=self._retry_base_ms / 1000)
            + wait_random(0, self._retry_jitter_ms / 1000),
            sleep=self._sleep,
            before_sleep=self._log_retry,
        )

        try:
            values = await retrying(self._embed_once, text, slug)
        except RetryError as e:
            raise RetryExhaustedError(
                slug, e.last_attempt.attempt_number
            ) from e.last_attempt.exception()

        if self._embed_delay_ms > 0:
            await self._sleep(self._embed_delay_ms / 1000)
        return values

    async def _embed_once(self, text: str, slug: str) -> list[float]:
        try:
            return await self._embedder.embed(text)
        except QuotaExceededError:
            raise
        except Exception as e:
            if classify_exception(e) is ErrorKind.QUOTA:
                raise QuotaExceededError(str(e), {"slug": slug}) from e
            raise

    def _log_retry(self, retry_state: RetryCallState) -> None:
        delay_ms = round(retry_state.next_action.sleep * 1000)
        logger.info(
            f"Embedding rate limited. Retrying in {delay_ms}ms "
            f"(attempt {retry_state.attempt_number}/{self._max_retries})."
        )

    async def _flush(self, pending: list[VectorRecord], report: IngestReport, final: bool) -> None:
        await self._vector_index.upsert(list(pending))
        report.batches += 1
        if final:
            logger.info(f"Upserted final {len(pending)} vectors")
        else:
            logger.info(f"Upserted {len(pending)} vectors so far")
        pending.clear()

    async def ingest(self, articles: list[Article]) -> IngestReport:
        """Vectorize articles into the index.

        Records are upserted every ``batch_size`` vectors and once more for
        the remainder. There is no rollback: a failure leaves earlier batches
        in place, and re-running overwrites them by ID.

        Args:
            articles: Articles to index.

        Returns:
            Ingestion report.
        """
        report = IngestReport()
        pending: list[VectorRecord] = []

        for article in articles:
            chunks = self.build_chunks(article)
            logger.info(f"Processing {article.slug} ({len(chunks)} chunks)")

            for chunk in chunks:
                values = await self.embed_with_retry(chunk.embed_text, article.slug)
                pending.append(
                    VectorRecord(id=chunk.id, values=values, metadata=chunk.metadata())
                )
                report.chunks += 1

                if len(pending) >= self._batch_size:
                    await self._flush(pending, report, final=False)

            report.documents += 1

        if pending:
            await self._flush(pending, report, final=True)

        logger.info("Vectorization complete.")
        return report

    async def run(self) -> IngestReport:
        """Index every article in the content folder.

        Returns:
            Ingestion report.
        """
        articles = self.loader.load_all()
        if not articles:
            logger.info("No MDX files found to vectorize.")
            return IngestReport()

        return await self.ingest(articles)
