"""Query pipeline — question → retrieve → (optional) LLM answer → sources."""

from __future__ import annotations

import logging

from docstore.llm.base import LLMProvider
from docstore.pipeline.prompts import RAG_SYSTEM_PROMPT, build_rag_prompt
from docstore.pipeline.schemas import PREVIEW_CHARS, QueryResponse, SourceCitation
from docstore.retrieval.retriever import Retriever
from docstore.retrieval.schemas import RetrievalConfig

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = (
    "No relevant documents found for this question. "
    "Upload documents via POST /documents."
)
RETRIEVAL_UNAVAILABLE_MESSAGE = "Document retrieval is currently unavailable."


class QueryPipeline:
    """Orchestrates question → retrieve → generate."""

    def __init__(
        self,
        retriever: Retriever,
        llm_provider: LLMProvider | None = None,
        min_score: float = 0.0,
        system_prompt: str = RAG_SYSTEM_PROMPT,
    ):
        self.retriever = retriever
        self.llm_provider = llm_provider
        self.min_score = min_score
        self.system_prompt = system_prompt

    async def answer(self, message: str, top_k: int = 5) -> QueryResponse:
        """Retrieve context for ``message`` and, if an LLM is configured, answer it.

        Without an LLM provider, ``response`` is None and the caller gets the
        retrieved sources only.
        """
        retrieval = await self.retriever.retrieve(
            message,
            config=RetrievalConfig(top_k=top_k, min_score=self.min_score),
        )

        if retrieval.unavailable:
            return QueryResponse(
                message=message,
                response=RETRIEVAL_UNAVAILABLE_MESSAGE,
                retrieval_unavailable=True,
                error=retrieval.error,
            )

        if not retrieval.results:
            return QueryResponse(message=message, response=NO_DOCUMENTS_MESSAGE)

        sources = [
            SourceCitation(
                source=r.chunk.source,
                similarity=r.score,
                chunk=r.chunk.chunk_index,
                preview=r.chunk.preview(PREVIEW_CHARS),
            )
            for r in retrieval.results
        ]

        if self.llm_provider is None:
            return QueryResponse(message=message, response=None, sources=sources)

        prompt = build_rag_prompt(
            question=message,
            context_texts=[r.chunk.content for r in retrieval.results],
            sources=[r.chunk.source for r in retrieval.results],
        )
        logger.info(
            "Answering with %d context chunks (%d chars of prompt)",
            len(retrieval.results), len(prompt),
        )

        try:
            answer = await self.llm_provider.generate(prompt, system=self.system_prompt)
        except Exception as exc:
            logger.error("LLM generation failed: %s", exc)
            return QueryResponse(
                message=message,
                response=None,
                sources=sources,
                error=f"Answer generation failed: {exc}",
            )

        return QueryResponse(message=message, response=answer, sources=sources)
