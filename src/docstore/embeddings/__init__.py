"""Embedding providers — OpenAI, Ollama, HuggingFace."""

from docstore.embeddings.base import EmbeddingProvider
from docstore.embeddings.factory import (
    available_providers,
    get_embedding_provider,
    provider_from_settings,
)

__all__ = [
    "EmbeddingProvider",
    "available_providers",
    "get_embedding_provider",
    "provider_from_settings",
]
