"""Upload loader — TXT, Markdown, JSON, PDF.

Works on in-memory bytes as received from multipart uploads. The file kind is
picked once per upload from the MIME type or the extension, then a single
decoder turns the bytes into text.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

from docstore.config import MAX_UPLOAD_BYTES
from docstore.documents.schemas import EXTENSIONS, FileKind, LoadResult
from docstore.errors import FileTooLargeError, UnsupportedFileTypeError

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = set(EXTENSIONS)
SUPPORTED_MIME_TYPES = {kind.value for kind in FileKind}


def accepted_types_description() -> str:
    """Human-readable list of accepted MIME types and extensions."""
    parts = [f"{kind.value} ({ext})" for ext, kind in EXTENSIONS.items()]
    return ", ".join(parts)


def detect_kind(filename: str, mime_type: str | None = None) -> FileKind:
    """Pick the file kind from the MIME type, falling back to the extension."""
    if mime_type:
        base = mime_type.split(";", 1)[0].strip().lower()
        if base in SUPPORTED_MIME_TYPES:
            return FileKind(base)

    ext = Path(filename).suffix.lower()
    if ext in EXTENSIONS:
        return EXTENSIONS[ext]

    raise UnsupportedFileTypeError(filename, mime_type, accepted_types_description())


class DocumentLoader:
    """Decode uploaded bytes into a ``LoadResult``."""

    def __init__(self, max_file_size_bytes: int = MAX_UPLOAD_BYTES):
        self.max_file_size_bytes = max_file_size_bytes

    def load_bytes(
        self,
        data: bytes,
        filename: str,
        mime_type: str | None = None,
    ) -> LoadResult:
        """Load a document from in-memory bytes.

        Raises:
            FileTooLargeError: ``data`` exceeds the upload limit.
            UnsupportedFileTypeError: neither MIME type nor extension is accepted.
        """
        if len(data) > self.max_file_size_bytes:
            raise FileTooLargeError(filename, len(data), self.max_file_size_bytes)

        kind = detect_kind(filename, mime_type)
        if kind is FileKind.PDF:
            result = self._load_pdf(data, filename)
        else:
            result = self._load_text(data)

        result.kind = kind
        result.source = filename
        result.char_count = len(result.text)
        return result

    def load_file(self, path: str | Path, mime_type: str | None = None) -> LoadResult:
        """Load a document from a filesystem path."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        return self.load_bytes(path.read_bytes(), path.name, mime_type)

    # ------------------------------------------------------------------
    # Format-specific decoders
    # ------------------------------------------------------------------

    @staticmethod
    def _load_text(data: bytes) -> LoadResult:
        try:
            text = data.decode("utf-8-sig")
            return LoadResult(text=text, page_count=1)
        except UnicodeDecodeError:
            text = data.decode("utf-8", errors="replace")
            return LoadResult(
                text=text,
                page_count=1,
                warnings=["Invalid UTF-8 sequences were replaced"],
            )

    @staticmethod
    def _load_pdf(data: bytes, filename: str) -> LoadResult:
        warnings: list[str] = []
        page_texts: list[str] = []

        try:
            import pdfplumber

            with pdfplumber.open(io.BytesIO(data)) as pdf:
                for page in pdf.pages:
                    page_texts.append(page.extract_text() or "")
        except Exception as exc:
            logger.warning("PDF extraction failed for %s: %s", filename, exc)
            placeholder = f"[PDF text extraction failed for {filename}: {exc}]"
            return LoadResult(
                text=placeholder,
                decode_failed=True,
                warnings=[f"PDF extraction error: {exc}"],
            )

        full_text = "\n\n".join(page_texts)
        if not full_text.strip():
            warnings.append("PDF contains no extractable text (may be scanned/image-only)")
            full_text = ""

        logger.info("PDF parsed: %s, %d pages, %d chars", filename, len(page_texts), len(full_text))
        return LoadResult(
            text=full_text,
            page_count=len(page_texts),
            warnings=warnings,
        )
