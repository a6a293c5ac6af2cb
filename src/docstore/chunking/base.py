"""Abstract base class for all chunkers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from docstore.chunking.schemas import ChunkDraft


class BaseChunker(ABC):
    """Interface for text chunking strategies.

    Implementations split text into overlapping windows and must not drop
    any non-whitespace text.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200):
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValueError(
                f"chunk_overlap must be in [0, chunk_size), got {chunk_overlap} "
                f"for chunk_size={chunk_size}"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    @abstractmethod
    def split(self, text: str) -> list[str]:
        """Split text into ordered window strings."""

    def chunk(self, text: str, source: str = "") -> list[ChunkDraft]:
        """Split text into numbered ``ChunkDraft`` objects.

        Args:
            text: Full decoded document text.
            source: Upload label propagated to every chunk.

        Returns:
            Chunks numbered ``0..n-1`` in left-to-right order.
        """
        return [
            ChunkDraft(content=piece, source=source, chunk_index=i)
            for i, piece in enumerate(self.split(text))
        ]

    @classmethod
    def strategy_name(cls) -> str:
        """Return human-readable strategy name."""
        return cls.__name__
