"""Model pool - generation with model fallback."""

import logging
import time
from typing import Callable, Iterable, Optional

from ..exceptions import AllModelsFailedError, NoModelsAvailableError
from ..protocols.llm import GenerativeModelProtocol, LLMProtocol
from ..strategies.model_selection import select_chat_models

logger = logging.getLogger(__name__)


class ModelPool:
    """Rotates through eligible chat models until one answers.

    Each model is tried at most once per call, in listing order. The list of
    eligible names is cached for ``ttl_seconds``; model handles are cached
    for the life of the pool.
    """

    def __init__(
        self,
        llm: LLMProtocol,
        family: str = "gemini",
        excluded_cost_tiers: Iterable[str] = ("pro",),
        ttl_seconds: float = 600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._llm = llm
        self._family = family
        self._excluded_cost_tiers = tuple(excluded_cost_tiers)
        self._ttl_seconds = ttl_seconds
        self._clock = clock

        self._handles: dict[str, GenerativeModelProtocol] = {}
        self._model_names: Optional[list[str]] = None
        self._fetched_at = 0.0

    def _is_fresh(self) -> bool:
        return (
            self._model_names is not None
            and self._clock() - self._fetched_at < self._ttl_seconds
        )

    async def available_models(self) -> list[str]:
        """Eligible chat model names, refreshed when the cache is stale.

        Raises:
            NoModelsAvailableError: Nothing passed the chat-model filter.
        """
        if self._is_fresh():
            return list(self._model_names)

        descriptors = await self._llm.list_models()
        names = select_chat_models(
            descriptors, self._family, self._excluded_cost_tiers
        )
        if not names:
            raise NoModelsAvailableError()

        self._model_names = names
        self._fetched_at = self._clock()
        logger.info(f"Model list refreshed: {len(names)} chat models ({', '.join(names)})")
        return list(names)

    def get_model(self, name: str) -> GenerativeModelProtocol:
        handle = self._handles.get(name)
        if handle is None:
            handle = self._llm.get_model(name)
            self._handles[name] = handle
        return handle

    def invalidate(self) -> None:
        """Drop the cached model list."""
        self._model_names = None
        self._fetched_at = 0.0

    async def generate(self, prompt: str) -> str:
        """Generate text, falling back across models on failure.

        Args:
            prompt: Prompt text.

        Returns:
            Trimmed answer from the first model that succeeds.

        Raises:
            NoModelsAvailableError: No eligible models.
            AllModelsFailedError: Every model failed; chained to the last error.
        """
        models = await self.available_models()
        last_error: Optional[BaseException] = None

        for name in models:
            try:
                text = await self.get_model(name).generate(prompt)
                return text.strip()
            except Exception as e:
                logger.warning(f"Gemini model failed ({name}): {e}")
                last_error = e

        raise AllModelsFailedError(models) from last_error
