import logging
from functools import cached_property
from typing import Any, Optional

import httpx
from openai import AsyncOpenAI

from devverse_rag.core.exceptions import ConfigurationError, InvalidResponseError
from devverse_rag.core.models.model import ModelDescriptor

logger = logging.getLogger(__name__)


def describe_model(raw: dict[str, Any]) -> ModelDescriptor:
    """Build a descriptor from one model listing entry.

    Entries without ``supportedGenerationMethods`` are assumed to support
    generation.
    """
    name = raw.get("name") or ""
    short_name = name.rsplit("/", 1)[-1].lower()
    tokens = short_name.split("-")

    methods = raw.get("supportedGenerationMethods")
    if isinstance(methods, list):
        supports_generation = "generateContent" in methods
        embed_only = "embedContent" in methods and not supports_generation
    else:
        supports_generation = True
        embed_only = False

    if "pro" in tokens:
        cost_tier = "pro"
    elif "lite" in tokens:
        cost_tier = "lite"
    elif "flash" in tokens:
        cost_tier = "flash"
    else:
        cost_tier = "standard"

    return ModelDescriptor(
        name=name,
        supports_generation=supports_generation,
        is_embedding_model=embed_only or "embedding" in short_name,
        cost_tier=cost_tier,
        family=tokens[0] if short_name else "",
    )


class GeminiChatModel:
    """Handle for one Gemini chat model."""

    def __init__(
        self,
        client: AsyncOpenAI,
        name: str,
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ):
        self.name = name
        self._client = client
        self._model = name.rsplit("/", 1)[-1]
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def generate(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )

        content = response.choices[0].message.content if response.choices else None
        if content is None:
            raise InvalidResponseError("Empty response from model.", {"model": self.name})
        return content


class GeminiClient:
    """Gemini model listing and chat model handles."""

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://generativelanguage.googleapis.com/v1",
        openai_url: str = "https://generativelanguage.googleapis.com/v1beta/openai/",
        temperature: float = 0.2,
        max_tokens: int = 1024,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Gemini client.

        Args:
            api_key: Google AI API key.
            api_url: Native REST API URL, used for model listing.
            openai_url: OpenAI-compatible API URL, used for generation.
            temperature: Sampling temperature.
            max_tokens: Max response tokens.
            timeout: HTTP timeout in seconds.
            transport: Custom HTTP transport.
        """
        self._api_key = api_key
        self._api_url = api_url.rstrip("/")
        self._openai_url = openai_url
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._transport = transport

    def _require_key(self) -> str:
        if not self._api_key:
            raise ConfigurationError("GOOGLE_AI_API_KEY")
        return self._api_key

    @cached_property
    def client(self) -> AsyncOpenAI:
        return AsyncOpenAI(base_url=self._openai_url, api_key=self._require_key())

    async def list_models(self) -> list[ModelDescriptor]:
        """List models, following pagination."""
        key = self._require_key()
        descriptors: list[ModelDescriptor] = []
        page_token = None

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as http:
            while True:
                params = {"key": key, "pageSize": 1000}
                if page_token:
                    params["pageToken"] = page_token

                resp = await http.get(f"{self._api_url}/models", params=params)
                resp.raise_for_status()
                data = resp.json()

                models = data.get("models") or []
                descriptors.extend(describe_model(m) for m in models if isinstance(m, dict))

                page_token = data.get("nextPageToken")
                if not page_token:
                    break

        logger.debug(f"Listed {len(descriptors)} Gemini models")
        return descriptors

    def get_model(self, name: str) -> GeminiChatModel:
        return GeminiChatModel(
            client=self.client,
            name=name,
            temperature=self._temperature,
            max_tokens=self._max_tokens,
        )
