import logging
from functools import cached_property
from typing import Optional

from openai import AsyncOpenAI

from devverse_rag.core.exceptions import ConfigurationError, InvalidResponseError

logger = logging.getLogger(__name__)


class GeminiEmbedder:
    """Text embeddings through Gemini's OpenAI-compatible API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = "text-embedding-004",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/",
    ):
        self._api_key = api_key
        self._model = model
        self._base_url = base_url

    @cached_property
    def client(self) -> AsyncOpenAI:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_AI_API_KEY")
        logger.info(f"Creating embedding client for {self._model}")
        return AsyncOpenAI(base_url=self._base_url, api_key=self._api_key)

    async def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")

        response = await self.client.embeddings.create(model=self._model, input=text)

        data = getattr(response, "data", None)
        values = getattr(data[0], "embedding", None) if data else None
        if not isinstance(values, list):
            raise InvalidResponseError(
                "Invalid embedding response format.", {"model": self._model}
            )
        return values
