"""Ingestion pipeline — upload bytes → decode → chunk → embed → store.

This is the entry point the HTTP layer and the startup auto-import use to add
documents to the vector store.
"""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path

from docstore.chunking.base import BaseChunker
from docstore.chunking.document import chunk_loaded
from docstore.chunking.factory import get_chunker
from docstore.documents.loader import SUPPORTED_EXTENSIONS, DocumentLoader
from docstore.errors import DocStoreError
from docstore.pipeline.schemas import ImportSummary, IngestResult
from docstore.vectorstore.memory_store import InMemoryVectorStore

logger = logging.getLogger(__name__)


class IngestPipeline:
    """Orchestrates document ingestion: decode → chunk → embed → store."""

    def __init__(
        self,
        vector_store: InMemoryVectorStore,
        loader: DocumentLoader | None = None,
        chunker: BaseChunker | None = None,
    ):
        self.vector_store = vector_store
        self.loader = loader or DocumentLoader()
        self.chunker = chunker or get_chunker()

    async def ingest_bytes(
        self,
        data: bytes,
        filename: str,
        mime_type: str | None = None,
    ) -> IngestResult:
        """Ingest one uploaded document.

        Raises:
            FileTooLargeError: upload exceeds the size limit.
            UnsupportedFileTypeError: file kind is not accepted.
            EmbeddingProviderError: embedding failed; nothing was stored.
        """
        load = self.loader.load_bytes(data, filename, mime_type)
        warnings = list(load.warnings)

        drafts = chunk_loaded(load, self.chunker)
        if not drafts:
            warnings.append("Document loaded but contains no extractable text")
            logger.warning("No content ingested from %s", filename)
            return IngestResult(filename=filename, chunks=0, total_chars=0, warnings=warnings)

        stored = await self.vector_store.ingest(drafts)
        total_chars = sum(c.chars for c in stored)

        logger.info(
            "Ingested %s: %d chars → %d chunks (%d chars stored)",
            filename, load.char_count, len(stored), total_chars,
        )
        return IngestResult(
            filename=filename,
            chunks=len(stored),
            total_chars=total_chars,
            warnings=warnings,
        )

    async def ingest_file(self, path: str | Path) -> IngestResult:
        """Ingest a document from the local filesystem."""
        path = Path(path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return await self.ingest_bytes(path.read_bytes(), path.name, mime_type)

    async def import_directory(self, directory: str | Path) -> ImportSummary:
        """Ingest every supported file in ``directory`` not already in the store.

        One failing file is logged and recorded; the rest are still imported.
        """
        directory = Path(directory)
        summary = ImportSummary()
        if not directory.is_dir():
            logger.info("No directory at %s - skipping auto-import", directory)
            return summary

        files = sorted(
            p for p in directory.iterdir()
            if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
        )
        logger.info("Auto-importing %d files from %s", len(files), directory)

        for path in files:
            if self.vector_store.has_source(path.name):
                logger.info("Skipping %s (already in vector store)", path.name)
                summary.skipped.append(path.name)
                continue
            try:
                result = await self.ingest_file(path)
            except (DocStoreError, OSError, ValueError) as exc:
                logger.error("Failed to import %s: %s", path.name, exc)
                summary.failed[path.name] = str(exc)
                continue
            summary.imported.append(path.name)
            summary.chunks += result.chunks

        logger.info(
            "Auto-import finished: %d imported, %d skipped, %d failed, %d chunks",
            len(summary.imported), len(summary.skipped), len(summary.failed), summary.chunks,
        )
        return summary
