"""Cosine similarity and brute-force ranking."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between two vectors; 0.0 if either has zero magnitude."""
    if len(a) != len(b):
        raise ValueError(f"Vector dimensions don't match: {len(a)} vs {len(b)}")
    scores = cosine_scores(np.asarray([a], dtype=np.float64), np.asarray(b, dtype=np.float64))
    return float(scores[0])


def cosine_scores(matrix: np.ndarray, query: np.ndarray) -> np.ndarray:
    """Score every row of ``matrix`` against ``query``.

    Args:
        matrix: Shape ``(n, d)``, one stored embedding per row.
        query: Shape ``(d,)``.

    Returns:
        Shape ``(n,)`` array of scores in [-1, 1].
    """
    dots = matrix @ query
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms > 0)
    return np.clip(scores, -1.0, 1.0)


def rank(scores: np.ndarray, top_k: int) -> list[int]:
    """Row indices of the ``top_k`` highest scores.

    Equal scores keep their original (insertion) order.
    """
    order = np.argsort(-scores, kind="stable")
    return [int(i) for i in order[:top_k]]
