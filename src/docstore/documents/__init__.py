"""Upload decoding — file-kind detection and text extraction."""

from docstore.documents.loader import DocumentLoader, detect_kind
from docstore.documents.schemas import FileKind, LoadResult

__all__ = [
    "DocumentLoader",
    "FileKind",
    "LoadResult",
    "detect_kind",
]
