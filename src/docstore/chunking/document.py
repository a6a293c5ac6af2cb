"""Upload → decoded text → chunks."""

from __future__ import annotations

import logging

from docstore.chunking.base import BaseChunker
from docstore.chunking.factory import get_chunker
from docstore.chunking.schemas import ChunkDraft
from docstore.documents.loader import DocumentLoader
from docstore.documents.schemas import LoadResult

logger = logging.getLogger(__name__)


def chunk_loaded(result: LoadResult, chunker: BaseChunker) -> list[ChunkDraft]:
    """Chunk an already decoded document.

    A document whose text could not be extracted yields a single placeholder
    chunk describing the failure. Empty decoded text yields no chunks.
    """
    if result.decode_failed:
        return [ChunkDraft(content=result.text, source=result.source, chunk_index=0)]
    return chunker.chunk(result.text, source=result.source)


def chunk_bytes(
    data: bytes,
    source_name: str,
    mime_type: str | None = None,
    loader: DocumentLoader | None = None,
    chunker: BaseChunker | None = None,
) -> list[ChunkDraft]:
    """Turn one uploaded document into ordered, overlapping chunks.

    Raises:
        FileTooLargeError: ``data`` exceeds the loader's upload limit.
        UnsupportedFileTypeError: the file kind is not accepted.
    """
    loader = loader or DocumentLoader()
    chunker = chunker or get_chunker()

    result = loader.load_bytes(data, source_name, mime_type)
    for warning in result.warnings:
        logger.warning("%s: %s", source_name, warning)

    drafts = chunk_loaded(result, chunker)
    logger.info(
        "Chunked %s: %d chars → %d chunks", source_name, result.char_count, len(drafts)
    )
    return drafts
