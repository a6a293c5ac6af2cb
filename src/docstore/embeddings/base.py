"""Abstract base class for embedding providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Interface for text embedding models.

    Implementations are awaited from the event loop and must raise
    ``EmbeddingProviderError`` for any transport, auth, or rate-limit failure.
    """

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts.

        Args:
            texts: Strings to embed.

        Returns:
            List of embedding vectors (same order as input).
        """

    @abstractmethod
    async def embed_query(self, query: str) -> list[float]:
        """Embed a single query string.

        Args:
            query: The search query.

        Returns:
            Embedding vector.
        """

    @property
    @abstractmethod
    def dimension(self) -> int | None:
        """Return the embedding dimensionality, or None if unknown until first call."""

    @property
    def configured(self) -> bool:
        """Whether the provider has what it needs (e.g. credentials) to be called."""
        return True

    async def aclose(self) -> None:
        """Release network clients held by the provider."""

    @classmethod
    def provider_name(cls) -> str:
        """Return human-readable provider name."""
        return cls.__name__
