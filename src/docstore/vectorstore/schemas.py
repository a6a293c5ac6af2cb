"""Data models for vector store operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class StoredChunk:
    """An embedded chunk held by the store. Immutable once stored."""

    id: str
    content: str
    source: str
    chunk_index: int
    ingested_at: datetime
    embedding: tuple[float, ...]

    @property
    def chars(self) -> int:
        return len(self.content)

    def preview(self, length: int = 100) -> str:
        return self.content[:length] + "..."


@dataclass(frozen=True)
class SearchResult:
    """A single search hit with its cosine similarity score."""

    chunk: StoredChunk
    score: float


@dataclass(frozen=True)
class StoreStats:
    """Derived store statistics.

    ``average_chars`` is the mean chunk length rounded to the nearest integer;
    ``sources`` maps each source to its chunk count in first-seen order.
    """

    chunk_count: int = 0
    document_count: int = 0
    total_chars: int = 0
    average_chars: int = 0
    sources: dict[str, int] = field(default_factory=dict)
