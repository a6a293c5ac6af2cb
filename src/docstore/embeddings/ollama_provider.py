"""Ollama embedding provider for self-hosted deployments.

Talks to a local Ollama server over its REST API. Newer servers accept a whole
batch on ``/api/embed``; older ones only expose the single-prompt
``/api/embeddings`` route, which is used once the batch route answers 404 or
405. Any other error status fails the call.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from docstore.embeddings.base import EmbeddingProvider
from docstore.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"

# Statuses meaning the server predates /api/embed
BATCH_ROUTE_MISSING = frozenset({404, 405})


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed support documents with a model served by Ollama."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimension: int | None = None,
        timeout: float = 30.0,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self._dimension = dimension
        self._batch_supported = True
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        if self._batch_supported:
            try:
                data = await self._post("/api/embed", {"model": self.model, "input": texts})
            except httpx.HTTPStatusError as exc:
                status = exc.response.status_code
                if status not in BATCH_ROUTE_MISSING:
                    raise EmbeddingProviderError(
                        f"Ollama embedding request failed: {exc}"
                    ) from exc
                logger.info(
                    "Ollama at %s has no batch embed route (%d), using /api/embeddings",
                    self.base_url, status,
                )
                self._batch_supported = False
            else:
                return self._remember(data.get("embeddings") or [])

        return [await self.embed_query(text) for text in texts]

    async def embed_query(self, query: str) -> list[float]:
        try:
            data = await self._post("/api/embeddings", {"model": self.model, "prompt": query})
        except httpx.HTTPStatusError as exc:
            raise EmbeddingProviderError(f"Ollama embedding request failed: {exc}") from exc
        if "embedding" not in data:
            raise EmbeddingProviderError("Ollama response has no 'embedding' field")
        return self._remember([data["embedding"]])[0]

    @property
    def dimension(self) -> int | None:
        return self._dimension

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to the server; status errors propagate, transport errors are wrapped."""
        try:
            resp = await self._client.post(path, json=payload)
        except httpx.HTTPError as exc:
            raise EmbeddingProviderError(f"Ollama embedding request failed: {exc}") from exc
        resp.raise_for_status()
        return resp.json()

    def _remember(self, vectors: list[list[float]]) -> list[list[float]]:
        if vectors and self._dimension is None:
            self._dimension = len(vectors[0])
        return vectors
