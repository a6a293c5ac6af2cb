"""FastAPI application — document upload, management, and retrieval endpoints.

The store and pipelines are built once per app in ``create_app`` and kept on
``app.state``; route handlers reach them through the request.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from docstore.chunking.factory import get_chunker
from docstore.config import Settings, load_settings
from docstore.documents.loader import DocumentLoader
from docstore.errors import (
    DocStoreError,
    DocumentNotFoundError,
    EmbeddingProviderError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from docstore.llm.base import LLMProvider
from docstore.pipeline.ingest import IngestPipeline
from docstore.pipeline.query import QueryPipeline
from docstore.retrieval.retriever import Retriever
from docstore.vectorstore.memory_store import InMemoryVectorStore

logger = logging.getLogger(__name__)

LIST_PREVIEW_CHARS = 100


class QueryRequest(BaseModel):
    message: str | None = None
    topK: int = 5


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _status_for(exc: DocStoreError) -> int:
    if isinstance(exc, (UnsupportedFileTypeError, FileTooLargeError)):
        return 400
    if isinstance(exc, DocumentNotFoundError):
        return 404
    return 500


async def _docstore_error_handler(request: Request, exc: DocStoreError) -> JSONResponse:
    status = _status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return _error(status, str(exc))


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = f"{field}: {first.get('msg', 'invalid value')}" if field else first.get("msg")
    else:
        message = "Invalid request"
    return _error(400, message or "Invalid request")


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def _build_vector_store(settings: Settings) -> InMemoryVectorStore:
    from docstore.embeddings.factory import provider_from_settings

    emb = settings.embedding
    return InMemoryVectorStore(
        embedding_provider=provider_from_settings(emb),
        dimension=emb.dimension,
        batch_size=emb.batch_size,
        embed_timeout=emb.timeout,
    )


def _build_llm(settings: Settings) -> LLMProvider | None:
    from docstore.llm.factory import provider_from_settings

    return provider_from_settings(settings.llm)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the optional directory auto-import, then close provider clients on shutdown."""
    settings: Settings = app.state.settings
    store: InMemoryVectorStore = app.state.vector_store
    import_dir = settings.ingestion.auto_import_dir
    if import_dir and not store.embedding_provider.configured:
        logger.warning(
            "Embedding provider %s is not configured; skipping auto-import of %s",
            store.embedding_provider.provider_name(), import_dir,
        )
    elif import_dir:
        summary = await app.state.ingest_pipeline.import_directory(import_dir)
        if summary.failed:
            logger.warning("Auto-import failures: %s", ", ".join(sorted(summary.failed)))

    yield

    logger.info("Shutting down with %d chunks in memory", store.count())
    await store.embedding_provider.aclose()
    llm: LLMProvider | None = app.state.llm_provider
    if llm is not None:
        await llm.aclose()


def create_app(
    settings: Settings | None = None,
    vector_store: InMemoryVectorStore | None = None,
    llm_provider: LLMProvider | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Application settings; loaded from ``settings.yaml`` when omitted.
        vector_store: Pre-built store (tests inject one with a mock embedder).
        llm_provider: Answer generator; built from ``settings.llm`` when omitted.

    Returns:
        A configured ``FastAPI`` instance.
    """
    settings = settings or load_settings()
    store = vector_store if vector_store is not None else _build_vector_store(settings)
    llm = llm_provider if llm_provider is not None else _build_llm(settings)

    chunker = get_chunker(
        settings.chunking.strategy,
        chunk_size=settings.chunking.chunk_size,
        chunk_overlap=settings.chunking.chunk_overlap,
    )
    loader = DocumentLoader(max_file_size_bytes=settings.ingestion.max_file_size_bytes)

    app = FastAPI(
        title="Support Document Store",
        description="Semantic document store for support-assistant retrieval",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.vector_store = store
    app.state.llm_provider = llm
    app.state.ingest_pipeline = IngestPipeline(store, loader=loader, chunker=chunker)
    app.state.query_pipeline = QueryPipeline(
        Retriever(store),
        llm_provider=llm,
        min_score=settings.retrieval.min_score,
    )

    app.add_exception_handler(DocStoreError, _docstore_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    _register_routes(app)
    return app


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


def _register_routes(app: FastAPI) -> None:
    @app.post("/documents")
    async def upload_document(request: Request, file: UploadFile | None = File(None)):
        if file is None or not file.filename:
            return _error(400, "No file uploaded. Use form-data with 'file' field.")

        data = await file.read()
        logger.info("Upload received: %s (%d bytes)", file.filename, len(data))

        pipeline: IngestPipeline = request.app.state.ingest_pipeline
        try:
            result = await pipeline.ingest_bytes(data, file.filename, file.content_type)
        except EmbeddingProviderError as exc:
            logger.error("Upload of %s failed: %s", file.filename, exc)
            return _error(500, f"Failed to process document: {exc}")
        except ValueError as exc:
            logger.error("Upload of %s failed: %s", file.filename, exc)
            return _error(500, str(exc) or "Failed to process document")

        return {
            "filename": result.filename,
            "chunks": result.chunks,
            "totalChars": result.total_chars,
        }

    @app.post("/query")
    async def query(request: Request, body: QueryRequest):
        message = (body.message or "").strip()
        if not message:
            return _error(400, "Message is required (string)")
        if body.topK < 1:
            return _error(400, "topK must be a positive integer")

        pipeline: QueryPipeline = request.app.state.query_pipeline
        result = await pipeline.answer(message, top_k=body.topK)

        payload: dict[str, Any] = {
            "response": result.response,
            "sources": [
                {
                    "source": s.source,
                    "similarity": s.similarity,
                    "chunk": s.chunk,
                    "preview": s.preview,
                }
                for s in result.sources
            ],
        }
        if result.retrieval_unavailable:
            payload["retrievalUnavailable"] = True
        if result.error:
            payload["error"] = result.error
        return payload

    @app.get("/documents")
    async def list_documents(request: Request):
        store: InMemoryVectorStore = request.app.state.vector_store
        stats = store.stats()
        documents = [
            {
                "source": source,
                "chunkCount": len(chunks),
                "totalChars": sum(c.chars for c in chunks),
                "uploadedAt": chunks[0].ingested_at.isoformat(),
                "chunks": [
                    {
                        "id": c.id,
                        "preview": c.preview(LIST_PREVIEW_CHARS),
                        "chars": c.chars,
                    }
                    for c in chunks
                ],
            }
            for source, chunks in store.sources().items()
        ]
        return {
            "stats": {
                "chunkCount": stats.chunk_count,
                "documentCount": stats.document_count,
                "totalCharacters": stats.total_chars,
                "averageCharacters": stats.average_chars,
                "sources": stats.sources,
            },
            "documents": documents,
        }

    @app.delete("/documents/{chunk_id}")
    async def delete_document(request: Request, chunk_id: str):
        store: InMemoryVectorStore = request.app.state.vector_store
        if not store.delete_by_id(chunk_id):
            raise DocumentNotFoundError(chunk_id)
        return {"message": f"Document {chunk_id} deleted"}

    @app.post("/documents/clear")
    async def clear_documents(request: Request):
        store: InMemoryVectorStore = request.app.state.vector_store
        count = store.clear()
        return {"message": f"Cleared {count} documents"}

    @app.get("/health")
    async def health(request: Request):
        store: InMemoryVectorStore = request.app.state.vector_store
        return {"status": "ok", "chunkCount": store.count()}


def main() -> None:
    """Run the API with uvicorn using the loaded settings."""
    import uvicorn

    from docstore.logging_config import configure_logging

    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()
