"""Answer-generation provider lookup."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from docstore.config import LLMSettings
from docstore.llm.base import LLMProvider

logger = logging.getLogger(__name__)

_PROVIDERS: dict[str, tuple[str, str]] = {
    "anthropic": ("docstore.llm.anthropic_provider", "AnthropicLLMProvider"),
    "ollama": ("docstore.llm.ollama_provider", "OllamaLLMProvider"),
}


def get_llm_provider(provider: str = "anthropic", **kwargs: Any) -> LLMProvider:
    """Instantiate an LLM provider by name.

    Args:
        provider: ``anthropic`` or ``ollama`` (case-insensitive).
        **kwargs: Forwarded to the provider class.

    Raises:
        ValueError: If the name is not registered.
    """
    name = provider.lower()
    try:
        module_path, class_name = _PROVIDERS[name]
    except KeyError:
        raise ValueError(
            f"Unknown LLM provider '{provider}'. Available: {available_providers()}"
        ) from None

    provider_cls = getattr(importlib.import_module(module_path), class_name)
    logger.info("LLM provider ready: %s", class_name)
    return provider_cls(**kwargs)


def provider_from_settings(settings: LLMSettings) -> LLMProvider | None:
    """Build the configured provider, or None when answer generation is off."""
    if not settings.provider:
        return None
    return get_llm_provider(
        settings.provider,
        model=settings.model,
        temperature=settings.temperature,
        max_tokens=settings.max_tokens,
    )


def available_providers() -> list[str]:
    return list(_PROVIDERS)
