"""Data models for document loading."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class FileKind(StrEnum):
    """Accepted upload formats."""

    PLAIN_TEXT = "text/plain"
    MARKDOWN = "text/markdown"
    JSON = "application/json"
    PDF = "application/pdf"


EXTENSIONS: dict[str, FileKind] = {
    ".txt": FileKind.PLAIN_TEXT,
    ".md": FileKind.MARKDOWN,
    ".json": FileKind.JSON,
    ".pdf": FileKind.PDF,
}


@dataclass
class LoadResult:
    """Result of decoding a single uploaded file.

    Attributes:
        text: Full decoded text (placeholder text when ``decode_failed``).
        kind: Detected file kind.
        source: Upload label, usually the file name.
        page_count: Number of PDF pages, 1 for text formats.
        char_count: Length of ``text``.
        decode_failed: True when text extraction failed and ``text`` is a placeholder.
        warnings: Non-fatal issues encountered during decoding.
    """

    text: str
    kind: FileKind = FileKind.PLAIN_TEXT
    source: str = ""
    page_count: int | None = None
    char_count: int = 0
    decode_failed: bool = False
    warnings: list[str] = field(default_factory=list)
