"""Fixed-size character windows with overlap.

The default strategy: every window is ``chunk_size`` characters except the
last, and each window starts ``chunk_size - chunk_overlap`` characters after
the previous one, so a sentence crossing a boundary also appears in the
neighbouring chunk.
"""

from __future__ import annotations

import logging

from docstore.chunking.base import BaseChunker

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1000
CHUNK_OVERLAP = 200


class FixedWindowChunker(BaseChunker):
    """Split text into fixed-length overlapping windows."""

    def __init__(self, chunk_size: int = CHUNK_SIZE, chunk_overlap: int = CHUNK_OVERLAP):
        super().__init__(chunk_size=chunk_size, chunk_overlap=chunk_overlap)

    def split(self, text: str) -> list[str]:
        step = self.chunk_size - self.chunk_overlap
        pieces: list[str] = []
        start = 0

        while start < len(text):
            end = min(start + self.chunk_size, len(text))
            window = text[start:end]
            if window.strip():
                pieces.append(window)
            if end >= len(text):
                break
            start += step

        if pieces:
            logger.info(
                "FixedWindowChunker produced %d chunks from %d chars (avg %d chars/chunk)",
                len(pieces), len(text), sum(len(p) for p in pieces) // len(pieces),
            )
        return pieces
