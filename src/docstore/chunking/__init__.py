"""Document chunking — overlapping text windows."""

from docstore.chunking.base import BaseChunker
from docstore.chunking.document import chunk_bytes
from docstore.chunking.schemas import ChunkDraft

__all__ = ["BaseChunker", "ChunkDraft", "chunk_bytes"]
