"""Abstract base class for vector stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from docstore.chunking.schemas import ChunkDraft
from docstore.vectorstore.schemas import SearchResult, StoredChunk, StoreStats


class VectorStore(ABC):
    """Interface for chunk stores that embed on ingestion."""

    @abstractmethod
    async def ingest(self, drafts: Sequence[ChunkDraft]) -> list[StoredChunk]:
        """Embed and store a batch of chunks, all or nothing.

        Args:
            drafts: Chunks produced by a chunker.

        Returns:
            The stored chunks, in input order.

        Raises:
            EmbeddingProviderError: embedding failed; nothing was stored.
        """

    @abstractmethod
    async def search(
        self, query: str, top_k: int = 5, source: str | None = None
    ) -> list[SearchResult]:
        """Search for the chunks most similar to ``query``.

        Args:
            query: Text to embed and compare.
            top_k: Maximum number of results.
            source: When given, only chunks from this source are scored.

        Returns:
            At most ``top_k`` results sorted by score (highest first).
        """

    @abstractmethod
    def delete_by_id(self, chunk_id: str) -> bool:
        """Delete one chunk. Returns whether it existed."""

    @abstractmethod
    def clear(self) -> int:
        """Delete all chunks. Returns how many were removed."""

    @abstractmethod
    def stats(self) -> StoreStats:
        """Return chunk, source and character counts."""

    @abstractmethod
    def list_all(self) -> list[StoredChunk]:
        """Return every stored chunk in insertion order."""

    def count(self) -> int:
        """Return the number of chunks in the store."""
        return self.stats().chunk_count

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
