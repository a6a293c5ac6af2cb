"""Vector store — in-memory chunk collection with cosine search."""

from docstore.vectorstore.base import VectorStore
from docstore.vectorstore.memory_store import InMemoryVectorStore
from docstore.vectorstore.schemas import SearchResult, StoredChunk, StoreStats

__all__ = [
    "InMemoryVectorStore",
    "SearchResult",
    "StoreStats",
    "StoredChunk",
    "VectorStore",
]
