"""Data models for the ingestion and query pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field

PREVIEW_CHARS = 150


@dataclass
class IngestResult:
    """Result of ingesting one uploaded document."""

    filename: str
    chunks: int
    total_chars: int
    warnings: list[str] = field(default_factory=list)


@dataclass
class ImportSummary:
    """Result of importing every supported file in a directory."""

    imported: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    chunks: int = 0


@dataclass
class SourceCitation:
    """A retrieved chunk as shown alongside an answer."""

    source: str
    similarity: float
    chunk: int
    preview: str


@dataclass
class QueryResponse:
    """Output of the query pipeline."""

    message: str
    response: str | None
    sources: list[SourceCitation] = field(default_factory=list)
    retrieval_unavailable: bool = False
    error: str | None = None
