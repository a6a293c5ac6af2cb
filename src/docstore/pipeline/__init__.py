"""End-to-end pipelines — upload ingestion, directory import, query answering."""

from docstore.pipeline.ingest import IngestPipeline
from docstore.pipeline.query import QueryPipeline
from docstore.pipeline.schemas import (
    ImportSummary,
    IngestResult,
    QueryResponse,
    SourceCitation,
)

__all__ = [
    "ImportSummary",
    "IngestPipeline",
    "IngestResult",
    "QueryPipeline",
    "QueryResponse",
    "SourceCitation",
]
