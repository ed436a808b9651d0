"""Vector index protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import VectorMatch, VectorRecord


@runtime_checkable
class VectorIndexProtocol(Protocol):
    """Protocol for vector storage."""

    async def upsert(self, records: list[VectorRecord]) -> None:
        """Insert or overwrite records by ID.

        Args:
            records: Vectors with metadata.
        """
        ...

    async def query(
        self,
        vector: list[float],
        top_k: int = 6,
        include_metadata: bool = True,
    ) -> list[VectorMatch]:
        """Nearest-neighbor search.

        Args:
            vector: Query vector.
            top_k: Number of matches to return.
            include_metadata: Whether to return stored metadata.

        Returns:
            Matches in descending similarity order.
        """
        ...
