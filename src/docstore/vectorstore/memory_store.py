"""In-memory vector store — brute-force cosine search over a dict.

Chunks live in an insertion-ordered ``dict`` keyed by id. Search scores every
stored chunk against the query (O(n·d)), which is fine for a single
organisation's document set of hundreds to low thousands of chunks.

All mutations of the dict happen in synchronous code after every awaited
embedding call has finished, so a concurrent coroutine never observes a
partially ingested batch.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Awaitable, Sequence
from datetime import UTC, datetime
from typing import TypeVar

import numpy as np

from docstore.chunking.schemas import ChunkDraft
from docstore.embeddings.base import EmbeddingProvider
from docstore.errors import EmbeddingProviderError
from docstore.vectorstore.base import VectorStore
from docstore.vectorstore.schemas import SearchResult, StoredChunk, StoreStats
from docstore.vectorstore.similarity import cosine_scores, rank

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 64
DEFAULT_EMBED_TIMEOUT = 30.0


class InMemoryVectorStore(VectorStore):
    """Process-local chunk store that embeds on ingestion."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        dimension: int | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        embed_timeout: float = DEFAULT_EMBED_TIMEOUT,
    ):
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.embedding_provider = embedding_provider
        self.batch_size = batch_size
        self.embed_timeout = embed_timeout
        self._dimension = dimension
        self._chunks: dict[str, StoredChunk] = {}
        logger.info(
            "InMemoryVectorStore initialized (provider=%s, dimension=%s)",
            embedding_provider.provider_name(),
            dimension or "auto",
        )

    @property
    def dimension(self) -> int | None:
        """Embedding dimensionality, fixed by config or the first ingestion."""
        return self._dimension

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def ingest(self, drafts: Sequence[ChunkDraft]) -> list[StoredChunk]:
        drafts = list(drafts)
        if not drafts:
            return []

        for draft in drafts:
            if not draft.content.strip():
                raise ValueError(
                    f"Chunk {draft.chunk_index} of '{draft.source}' has no content"
                )

        texts = [d.content for d in drafts]
        embeddings: list[list[float]] = []
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i : i + self.batch_size]
            vectors = await self._bounded(self.embedding_provider.embed_texts(batch))
            if len(vectors) != len(batch):
                raise EmbeddingProviderError(
                    f"Embedding provider returned {len(vectors)} vectors for {len(batch)} texts"
                )
            embeddings.extend(vectors)

        # No awaits from here on: the batch lands in the store as one step.
        dimension = self._check_dimensions(embeddings)
        ingested_at = datetime.now(UTC)
        stored = [
            StoredChunk(
                id=uuid.uuid4().hex,
                content=draft.content,
                source=draft.source,
                chunk_index=draft.chunk_index,
                ingested_at=ingested_at,
                embedding=tuple(float(x) for x in vector),
            )
            for draft, vector in zip(drafts, embeddings, strict=True)
        ]
        if self._dimension is None:
            self._dimension = dimension
        for chunk in stored:
            self._chunks[chunk.id] = chunk

        logger.info(
            "Ingested %d chunks from %s (total: %d)",
            len(stored),
            ", ".join(sorted({c.source for c in stored})),
            len(self._chunks),
        )
        return stored

    def delete_by_id(self, chunk_id: str) -> bool:
        removed = self._chunks.pop(chunk_id, None)
        if removed is None:
            logger.debug("Delete requested for unknown chunk %s", chunk_id)
            return False
        logger.info("Chunk deleted: %s (%s #%d)", chunk_id, removed.source, removed.chunk_index)
        return True

    def clear(self) -> int:
        count = len(self._chunks)
        self._chunks.clear()
        logger.info("Cleared %d chunks", count)
        return count

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(
        self, query: str, top_k: int = 5, source: str | None = None
    ) -> list[SearchResult]:
        if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k < 1:
            raise ValueError(f"top_k must be a positive integer, got {top_k!r}")
        if not self._candidates(source):
            return []

        query_embedding = await self._bounded(self.embedding_provider.embed_query(query))
        results = self.search_by_embedding(query_embedding, top_k, source=source)

        logger.info(
            "Search returned %d results (top_k=%d, source=%s)",
            len(results), top_k, source or "*",
        )
        for i, r in enumerate(results, 1):
            logger.debug(
                "  %d. %s #%d (similarity: %.4f)",
                i, r.chunk.source, r.chunk.chunk_index, r.score,
            )
        return results

    def search_by_embedding(
        self,
        query_embedding: Sequence[float],
        top_k: int = 5,
        source: str | None = None,
    ) -> list[SearchResult]:
        """Score stored chunks against a query vector and keep the best ``top_k``.

        With ``source`` set, chunks from other sources are dropped before scoring.
        """
        snapshot = self._candidates(source)
        if not snapshot:
            return []

        if len(query_embedding) != len(snapshot[0].embedding):
            raise EmbeddingProviderError(
                f"Query embedding has {len(query_embedding)} dimensions, "
                f"store has {len(snapshot[0].embedding)}"
            )

        matrix = np.array([c.embedding for c in snapshot], dtype=np.float64)
        query_vec = np.asarray(query_embedding, dtype=np.float64)
        scores = cosine_scores(matrix, query_vec)

        return [
            SearchResult(chunk=snapshot[i], score=float(scores[i]))
            for i in rank(scores, top_k)
        ]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get(self, chunk_id: str) -> StoredChunk | None:
        return self._chunks.get(chunk_id)

    def list_all(self) -> list[StoredChunk]:
        return list(self._chunks.values())

    def stats(self) -> StoreStats:
        per_source: dict[str, int] = {}
        total_chars = 0
        for chunk in self._chunks.values():
            per_source[chunk.source] = per_source.get(chunk.source, 0) + 1
            total_chars += chunk.chars
        count = len(self._chunks)
        return StoreStats(
            chunk_count=count,
            document_count=len(per_source),
            total_chars=total_chars,
            average_chars=round(total_chars / count) if count else 0,
            sources=per_source,
        )

    def sources(self) -> dict[str, list[StoredChunk]]:
        """Group stored chunks by source, in first-seen order."""
        grouped: dict[str, list[StoredChunk]] = {}
        for chunk in self._chunks.values():
            grouped.setdefault(chunk.source, []).append(chunk)
        return grouped

    def has_source(self, source: str) -> bool:
        return any(c.source == source for c in self._chunks.values())

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _candidates(self, source: str | None) -> list[StoredChunk]:
        if source is None:
            return list(self._chunks.values())
        return [c for c in self._chunks.values() if c.source == source]

    async def _bounded(self, call: Awaitable[T]) -> T:
        """Await a provider call under the timeout, normalising every failure."""
        try:
            return await asyncio.wait_for(call, timeout=self.embed_timeout)
        except EmbeddingProviderError:
            raise
        except TimeoutError as exc:
            raise EmbeddingProviderError(
                f"Embedding provider timed out after {self.embed_timeout}s"
            ) from exc
        except Exception as exc:
            raise EmbeddingProviderError(f"Embedding provider failed: {exc}") from exc

    def _check_dimensions(self, embeddings: list[list[float]]) -> int:
        expected = self._dimension or len(embeddings[0])
        if expected == 0:
            raise EmbeddingProviderError("Embedding provider returned empty vectors")
        for vector in embeddings:
            if len(vector) != expected:
                raise EmbeddingProviderError(
                    f"Embedding has {len(vector)} dimensions, expected {expected}"
                )
        return expected
