"""Retriever — search the vector store, filter by score, degrade on provider failure."""

from __future__ import annotations

import logging

from docstore.errors import EmbeddingProviderError
from docstore.retrieval.schemas import RetrievalConfig, RetrievalResult
from docstore.vectorstore.base import VectorStore

logger = logging.getLogger(__name__)


class Retriever:
    """Query-time wrapper around ``VectorStore.search``."""

    def __init__(self, vector_store: VectorStore):
        self.vector_store = vector_store

    async def retrieve(self, query: str, config: RetrievalConfig | None = None) -> RetrievalResult:
        """Find the chunks most similar to ``query``.

        Embedding failures never propagate; they come back as an empty
        result with ``unavailable=True`` so the caller can answer without
        document context.

        Args:
            query: The customer's question.
            config: ``top_k`` and ``min_score``; defaults when omitted.

        Returns:
            A ``RetrievalResult`` ordered by descending similarity.
        """
        settings = config or RetrievalConfig()

        try:
            hits = await self.vector_store.search(query, top_k=settings.top_k)
        except EmbeddingProviderError as exc:
            logger.warning("Retrieval unavailable: %s", exc)
            return RetrievalResult(query=query, unavailable=True, error=str(exc))

        kept = [hit for hit in hits if hit.score >= settings.min_score] if settings.min_score > 0 else hits
        logger.info(
            "Kept %d of %d hits (top_k=%d, min_score=%.2f)",
            len(kept), len(hits), settings.top_k, settings.min_score,
        )
        return RetrievalResult(query=query, results=kept, total_candidates=len(hits))
