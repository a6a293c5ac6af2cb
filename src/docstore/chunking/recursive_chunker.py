"""Separator-aware chunker.

Windows prefer to end on a paragraph break, then a line break, then a
sentence end, then a space. When none of those fall inside the window the
window is cut at ``chunk_size``. The next window always starts
``chunk_overlap`` characters before the previous end.
"""

from __future__ import annotations

import logging

from docstore.chunking.base import BaseChunker

logger = logging.getLogger(__name__)

SEPARATORS = ("\n\n", "\n", ". ", " ")


class RecursiveChunker(BaseChunker):
    """Split text on natural boundaries, keeping windows under ``chunk_size``."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separators: tuple[str, ...] = SEPARATORS,
    ):
        super().__init__(chunk_size=chunk_size, chunk_overlap=chunk_overlap)
        self.separators = separators

    def split(self, text: str) -> list[str]:
        pieces: list[str] = []
        start = 0

        while start < len(text):
            end = min(start + self.chunk_size, len(text))
            if end < len(text):
                end = self._boundary(text, start, end)

            window = text[start:end]
            if window.strip():
                pieces.append(window)
            if end >= len(text):
                break
            start = end - self.chunk_overlap

        logger.info("RecursiveChunker produced %d chunks from %d chars", len(pieces), len(text))
        return pieces

    def _boundary(self, text: str, start: int, end: int) -> int:
        # The boundary must lie past the overlap so the next window moves forward.
        floor = start + self.chunk_overlap + 1
        for sep in self.separators:
            idx = text.rfind(sep, floor, end)
            if idx != -1:
                return idx + len(sep)
        return end
