"""Chat service - coordinates retrieval, prompting, generation and citations."""

import asyncio
import logging
from enum import Enum
from typing import Optional, Sequence

from ..exceptions import ServiceUnavailableError
from ..models.chat import ChatMessage, ChatResponse
from .citations import finalize
from .model_pool import ModelPool
from .prompt_builder import build_prompt
from .search_service import SearchService

logger = logging.getLogger(__name__)

NO_SOURCES_ANSWER = "I do not have enough information from the articles to answer that yet."


class ChatStage(Enum):
    """Stages of one request/response cycle."""
    RETRIEVING = "retrieving"
    GENERATING = "generating"
    FINALIZING = "finalizing"
    DONE = "done"


class ChatService:
    """Single-attempt RAG pipeline over the article index."""

    def __init__(
        self,
        search_service: SearchService,
        model_pool: ModelPool,
        top_k: int = 6,
        timeout_seconds: Optional[float] = None,
    ):
        """Initialize chat service.

        Args:
            search_service: Retriever.
            model_pool: Generator with model fallback.
            top_k: Sources per answer.
            timeout_seconds: Optional deadline for the whole request.
        """
        self._search = search_service
        self._model_pool = model_pool
        self._top_k = top_k
        self._timeout_seconds = timeout_seconds

    def _enter(self, stage: ChatStage, question: str) -> None:
        logger.debug(f"[chat] {stage.value}: '{question[:50]}...'")

    async def _respond(self, question: str, history: Sequence[ChatMessage]) -> ChatResponse:
        self._enter(ChatStage.RETRIEVING, question)
        sources = await self._search.retrieve(question, self._top_k)

        if not sources:
            logger.info(f"No sources for '{question[:50]}...', replying with fallback answer")
            self._enter(ChatStage.DONE, question)
            return ChatResponse(answer=NO_SOURCES_ANSWER, sources=[])

        self._enter(ChatStage.GENERATING, question)
        prompt = build_prompt(question, history, sources)
        raw_answer = await self._model_pool.generate(prompt)

        self._enter(ChatStage.FINALIZING, question)
        answer = finalize(raw_answer, sources)

        self._enter(ChatStage.DONE, question)
        return ChatResponse(answer=answer, sources=sources)

    async def build_chat_response(
        self,
        question: str,
        history: Optional[Sequence[ChatMessage]] = None,
    ) -> ChatResponse:
        """Answer a question from the article index.

        Args:
            question: User question, already trimmed and non-empty.
            history: Earlier turns supplied by the caller.

        Returns:
            Answer and the sources it cites.

        Raises:
            ServiceUnavailableError: The optional deadline elapsed.
        """
        history = list(history or [])

        if self._timeout_seconds is None:
            return await self._respond(question, history)

        try:
            return await asyncio.wait_for(
                self._respond(question, history), timeout=self._timeout_seconds
            )
        except asyncio.TimeoutError as e:
            raise ServiceUnavailableError(
                "Chat request timed out.", {"timeout_seconds": self._timeout_seconds}
            ) from e
