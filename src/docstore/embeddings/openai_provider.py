"""OpenAI embedding provider (hosted, default).

Needs the ``openai`` extra. The API key comes from ``OPENAI_API_KEY`` unless
passed explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from docstore.embeddings.base import EmbeddingProvider
from docstore.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"

KNOWN_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}

MAX_INPUTS_PER_REQUEST = 2048


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embed support documents through the OpenAI embeddings endpoint."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        dimensions: int | None = None,
        timeout: float = 30.0,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install support-docstore[openai]"
            ) from exc

        self._openai = openai
        self.model = model
        # Only the text-embedding-3 models accept a shortened output size.
        self._requested_dimensions = dimensions
        self._dimension = dimensions or KNOWN_DIMENSIONS.get(model)
        # A missing key must not stop the service from starting; calls fail instead.
        self._setup_error: str | None = None
        self._client: Any = None
        try:
            self._client = openai.AsyncOpenAI(api_key=api_key, timeout=timeout)
        except openai.OpenAIError as exc:
            self._setup_error = str(exc)
            logger.warning("OpenAI embeddings not configured: %s", exc)

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        vectors: list[list[float]] = []
        for offset in range(0, len(texts), MAX_INPUTS_PER_REQUEST):
            window = texts[offset : offset + MAX_INPUTS_PER_REQUEST]
            items = await self._request(window)
            # The API does not promise response order; ``index`` does.
            vectors.extend(item.embedding for item in sorted(items, key=lambda d: d.index))

        if vectors:
            logger.debug("OpenAI embedded %d texts (%s)", len(vectors), self.model)
        return vectors

    async def embed_query(self, query: str) -> list[float]:
        (item,) = await self._request([query])
        return item.embedding

    @property
    def dimension(self) -> int | None:
        return self._dimension

    @property
    def configured(self) -> bool:
        return self._client is not None

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()

    async def _request(self, inputs: list[str]) -> list[Any]:
        if self._client is None:
            raise EmbeddingProviderError(f"OpenAI client is not configured: {self._setup_error}")
        kwargs: dict[str, Any] = {"model": self.model, "input": inputs}
        if self._requested_dimensions:
            kwargs["dimensions"] = self._requested_dimensions
        try:
            response = await self._client.embeddings.create(**kwargs)
        except self._openai.OpenAIError as exc:
            raise EmbeddingProviderError(f"OpenAI embedding request failed: {exc}") from exc
        return list(response.data)
