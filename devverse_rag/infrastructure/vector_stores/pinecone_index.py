import logging
from typing import Optional

import httpx

from devverse_rag.core.exceptions import ConfigurationError, InvalidResponseError
from devverse_rag.core.models.document import VectorMatch, VectorRecord

logger = logging.getLogger(__name__)

API_VERSION = "2024-07"


class PineconeVectorIndex:
    """Vector index using the Pinecone HTTP API."""

    def __init__(
        self,
        api_key: Optional[str],
        index_name: str = "devverse-articles",
        host: Optional[str] = None,
        control_url: str = "https://api.pinecone.io",
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Pinecone client.

        Args:
            api_key: Pinecone API key.
            index_name: Index name.
            host: Data-plane host. Looked up from the control plane if unset.
            control_url: Control-plane URL.
            timeout: HTTP timeout in seconds.
            transport: Custom HTTP transport.
        """
        self._api_key = api_key
        self._index_name = index_name
        self._host = self._normalize_host(host) if host else None
        self._control_url = control_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @staticmethod
    def _normalize_host(host: str) -> str:
        host = host.rstrip("/")
        if not host.startswith(("http://", "https://")):
            host = f"https://{host}"
        return host

    @property
    def _headers(self) -> dict[str, str]:
        if not self._api_key:
            raise ConfigurationError("PINECONE_API_KEY")
        return {
            "Api-Key": self._api_key,
            "X-Pinecone-API-Version": API_VERSION,
        }

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers, timeout=self._timeout, transport=self._transport
        )

    async def _ensure_host(self, http: httpx.AsyncClient) -> str:
        """Get data-plane host for the index."""
        if self._host:
            return self._host

        resp = await http.get(f"{self._control_url}/indexes/{self._index_name}")
        resp.raise_for_status()
        host = resp.json().get("host")
        if not host:
            raise InvalidResponseError(
                "Index description has no host.", {"index": self._index_name}
            )
        self._host = self._normalize_host(host)
        logger.info(f"Resolved index {self._index_name}: {self._host}")
        return self._host

    async def upsert(self, records: list[VectorRecord]) -> None:
        """Insert or overwrite vectors by ID."""
        if not records:
            return

        async with self._http() as http:
            host = await self._ensure_host(http)
            resp = await http.post(
                f"{host}/vectors/upsert",
                json={"vectors": [r.to_dict() for r in records]},
            )
            resp.raise_for_status()

    async def query(
        self,
        vector: list[float],
        top_k: int = 6,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        """Search by vector."""
        async with self._http() as http:
            host = await self._ensure_host(http)
            resp = await http.post(
                f"{host}/query",
                json={
                    "vector": vector,
                    "topK": top_k,
                    "includeMetadata": include_metadata,
                    "includeValues": False,
                },
            )
            resp.raise_for_status()

        matches = resp.json().get("matches") or []
        if not isinstance(matches, list):
            raise InvalidResponseError("Invalid query response format.")

        return [
            VectorMatch(
                id=str(m.get("id", "")),
                score=float(m.get("score") or 0.0),
                metadata=m.get("metadata") or {},
            )
            for m in matches
            if isinstance(m, dict)
        ]
