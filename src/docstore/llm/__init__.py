"""LLM providers — Anthropic, Ollama."""

from docstore.llm.base import LLMProvider
from docstore.llm.factory import available_providers, get_llm_provider

__all__ = ["LLMProvider", "available_providers", "get_llm_provider"]
