"""Tests for the retriever — score filtering and graceful degradation."""

from __future__ import annotations

import pytest

from docstore.chunking.schemas import ChunkDraft
from docstore.retrieval.retriever import Retriever
from docstore.retrieval.schemas import RetrievalConfig
from docstore.vectorstore.memory_store import InMemoryVectorStore

DOCS = [
    ChunkDraft(content="Refunds are issued within 14 days of purchase.", source="faq.txt",
               chunk_index=0),
    ChunkDraft(content="Restart the router if the status light blinks red.", source="faq.txt",
               chunk_index=1),
    ChunkDraft(content="Invoices are sent on the first day of each month.", source="billing.md",
               chunk_index=0),
]


@pytest.fixture
async def populated_store(store: InMemoryVectorStore) -> InMemoryVectorStore:
    await store.ingest(DOCS)
    return store


class TestRetriever:
    async def test_default_config(self, populated_store: InMemoryVectorStore):
        result = await Retriever(populated_store).retrieve("refund purchase")
        assert result.query == "refund purchase"
        assert not result.unavailable
        assert result.error is None
        assert len(result.results) == 3
        assert result.total_candidates == 3

    async def test_top_k(self, populated_store: InMemoryVectorStore):
        result = await Retriever(populated_store).retrieve(
            "router status light blinks red", config=RetrievalConfig(top_k=1),
        )
        assert len(result.results) == 1
        assert result.results[0].chunk.chunk_index == 1

    async def test_min_score_filters(self, populated_store: InMemoryVectorStore):
        exact = DOCS[2].content
        result = await Retriever(populated_store).retrieve(
            exact, config=RetrievalConfig(top_k=3, min_score=0.99),
        )
        assert result.total_candidates == 3
        assert [r.chunk.source for r in result.results] == ["billing.md"]

    async def test_empty_store(self, store: InMemoryVectorStore):
        result = await Retriever(store).retrieve("anything")
        assert result.results == []
        assert not result.unavailable

    async def test_provider_failure_is_unavailable(
        self, populated_store: InMemoryVectorStore,
    ):
        embedder = populated_store.embedding_provider
        embedder.fail_on_call = embedder.calls + 1

        result = await Retriever(populated_store).retrieve("refund")

        assert result.unavailable
        assert result.results == []
        assert "mock provider failure" in result.error

    async def test_provider_timeout_is_unavailable(self, embedder_factory):
        store = InMemoryVectorStore(embedder_factory(), embed_timeout=0.05)
        await store.ingest(DOCS)
        store.embedding_provider.delay = 1.0

        result = await Retriever(store).retrieve("refund")

        assert result.unavailable
        assert "timed out" in result.error
