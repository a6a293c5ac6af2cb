"""Embedding provider factory — name lookup, lazy import, shared instances."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from docstore.config import EmbeddingSettings
from docstore.embeddings.base import EmbeddingProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Registered providers: name -> (module, class)
#
# Modules are imported on first use so optional SDKs stay optional.
# ---------------------------------------------------------------------------

_PROVIDERS: dict[str, tuple[str, str]] = {
    "openai": ("docstore.embeddings.openai_provider", "OpenAIEmbeddingProvider"),
    "ollama": ("docstore.embeddings.ollama_provider", "OllamaEmbeddingProvider"),
    "huggingface": ("docstore.embeddings.huggingface_provider", "HuggingFaceEmbeddingProvider"),
}

# Instances built with default arguments, shared per provider name
_shared: dict[str, EmbeddingProvider] = {}


def get_embedding_provider(provider: str = "openai", **kwargs: Any) -> EmbeddingProvider:
    """Return an embedding provider by name.

    Calls without constructor arguments share a single instance per name;
    any keyword argument forces a fresh instance.

    Args:
        provider: One of ``openai``, ``ollama``, ``huggingface`` (case-insensitive).
        **kwargs: Forwarded to the provider class.

    Returns:
        An ``EmbeddingProvider`` instance.

    Raises:
        ValueError: If the name is not registered.
    """
    name = provider.lower()
    if name not in _PROVIDERS:
        raise ValueError(
            f"Unknown embedding provider '{provider}'. Available: {available_providers()}"
        )

    if not kwargs and name in _shared:
        return _shared[name]

    module_path, class_name = _PROVIDERS[name]
    provider_cls = getattr(importlib.import_module(module_path), class_name)
    instance = provider_cls(**kwargs)
    if not kwargs:
        _shared[name] = instance
    logger.info("Embedding provider ready: %s", class_name)
    return instance


def provider_from_settings(settings: EmbeddingSettings) -> EmbeddingProvider:
    """Build the configured provider, translating settings to constructor kwargs."""
    name = settings.provider.lower()
    kwargs: dict[str, Any] = {}
    if settings.model:
        kwargs["model"] = settings.model
    if name == "openai":
        kwargs["timeout"] = settings.timeout
        if settings.dimension:
            kwargs["dimensions"] = settings.dimension
    elif name == "ollama":
        kwargs["timeout"] = settings.timeout
        if settings.dimension:
            kwargs["dimension"] = settings.dimension
    return get_embedding_provider(name, **kwargs)


def available_providers() -> list[str]:
    return list(_PROVIDERS)


def clear_cache() -> None:
    """Forget shared instances so the next lookup builds a new one."""
    _shared.clear()
