"""Data models for retrieval operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from docstore.vectorstore.schemas import SearchResult


@dataclass
class RetrievalConfig:
    """Configuration for a retrieval operation."""

    top_k: int = 5
    min_score: float = 0.0


@dataclass
class RetrievalResult:
    """Result of a retrieval operation.

    ``unavailable`` is set when the embedding provider failed; ``results`` is
    then empty and ``error`` carries the provider's message.
    """

    query: str
    results: list[SearchResult] = field(default_factory=list)
    total_candidates: int = 0
    unavailable: bool = False
    error: str | None = None
