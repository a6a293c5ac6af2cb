"""Chunker factory — registry, lazy import, singleton cache."""

from __future__ import annotations

import importlib
import logging

from docstore.chunking.base import BaseChunker

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Chunker registry
#
# Each entry: (strategy_key, module_path, class_name)
# ---------------------------------------------------------------------------

_CHUNKER_REGISTRY: list[tuple[str, str, str]] = [
    ("fixed", "docstore.chunking.fixed_chunker", "FixedWindowChunker"),
    ("recursive", "docstore.chunking.recursive_chunker", "RecursiveChunker"),
]

# Singleton cache
_chunker_cache: dict[str, BaseChunker] = {}


def get_chunker(strategy: str = "fixed", **kwargs) -> BaseChunker:
    """Get a chunker by strategy name.

    Args:
        strategy: One of ``fixed``, ``recursive``.
        **kwargs: Passed to the chunker constructor (``chunk_size``, ``chunk_overlap``).

    Returns:
        A ``BaseChunker`` instance.
    """
    key = strategy.lower()

    if not kwargs and key in _chunker_cache:
        return _chunker_cache[key]

    for reg_key, module_path, cls_name in _CHUNKER_REGISTRY:
        if reg_key == key:
            mod = importlib.import_module(module_path)
            cls = getattr(mod, cls_name)
            instance = cls(**kwargs)
            if not kwargs:
                _chunker_cache[key] = instance
            return instance

    available = [k for k, _, _ in _CHUNKER_REGISTRY]
    raise ValueError(f"Unknown chunking strategy '{strategy}'. Available: {available}")


def available_chunkers() -> list[str]:
    """Return names of registered chunking strategies."""
    return [k for k, _, _ in _CHUNKER_REGISTRY]


def clear_cache() -> None:
    """Clear singleton cache (for testing)."""
    _chunker_cache.clear()
