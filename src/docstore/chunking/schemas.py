"""Data models for chunks."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkDraft:
    """A piece of a source document, not yet embedded or stored."""

    content: str
    source: str
    chunk_index: int = 0
