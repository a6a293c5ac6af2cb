"""Local sentence-transformers embedding provider.

Needs the ``huggingface`` extra. The model is loaded once at construction;
``encode`` is CPU/GPU-bound, so every call runs in a worker thread to keep the
event loop serving requests.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from docstore.embeddings.base import EmbeddingProvider
from docstore.errors import EmbeddingProviderError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """Embed support documents in-process with a sentence-transformers model."""

    def __init__(self, model: str = DEFAULT_MODEL, device: str | None = None):
        try:
            import sentence_transformers
        except ImportError as exc:
            raise ImportError(
                "sentence-transformers required: pip install support-docstore[huggingface]"
            ) from exc

        self.model = model
        self._encoder: Any = sentence_transformers.SentenceTransformer(model, device=device)
        self._width = int(self._encoder.get_sentence_embedding_dimension())
        logger.info("sentence-transformers model %s ready (%d dims)", model, self._width)

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        matrix = await self._encode(texts)
        return matrix.tolist()

    async def embed_query(self, query: str) -> list[float]:
        matrix = await self._encode([query])
        return matrix[0].tolist()

    @property
    def dimension(self) -> int:
        return self._width

    async def _encode(self, texts: list[str]) -> Any:
        try:
            return await asyncio.to_thread(
                self._encoder.encode, texts, convert_to_numpy=True, show_progress_bar=False,
            )
        except (RuntimeError, ValueError) as exc:
            raise EmbeddingProviderError(f"{self.model} encoding failed: {exc}") from exc
