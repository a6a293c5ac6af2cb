"""Retrieval — similarity search with graceful degradation."""

from docstore.retrieval.retriever import Retriever
from docstore.retrieval.schemas import RetrievalConfig, RetrievalResult

__all__ = ["Retriever", "RetrievalConfig", "RetrievalResult"]
