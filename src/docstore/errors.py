"""Error types shared across the document store."""

from __future__ import annotations


class DocStoreError(Exception):
    """Base class for recoverable document-store errors."""


class UnsupportedFileTypeError(DocStoreError):
    """Upload's MIME type and extension are both outside the accepted set."""

    def __init__(self, filename: str, mime_type: str | None, accepted: str):
        self.filename = filename
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported file type for '{filename}' ({mime_type or 'unknown'}). "
            f"Supported: {accepted}"
        )


class FileTooLargeError(DocStoreError):
    """Upload exceeds the configured size ceiling."""

    def __init__(self, filename: str, size: int, limit: int):
        self.filename = filename
        self.size = size
        self.limit = limit
        super().__init__(
            f"File '{filename}' is {size} bytes; the upload limit is {limit} bytes"
        )


class EmbeddingProviderError(DocStoreError):
    """The embedding provider failed (network, auth, rate limit, timeout, bad response)."""


class DocumentNotFoundError(DocStoreError):
    """No chunk exists with the requested id."""

    def __init__(self, chunk_id: str):
        self.chunk_id = chunk_id
        super().__init__(f"Document {chunk_id} not found")
