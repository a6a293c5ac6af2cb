"""Prompt text for answering support questions from retrieved documents."""

from __future__ import annotations

from itertools import zip_longest

RAG_SYSTEM_PROMPT = """\
You are a customer-support assistant. Answer the customer's question using \
ONLY the support documents you are given.

Rules:
1. Cite documents by number, e.g. "As document 2 explains, ...".
2. When the documents do not cover the question, say so and suggest \
contacting a support agent instead of guessing.
3. Quote plans, prices, dates, and product names exactly as written.
4. Reply in the language the customer used.
"""

ANSWER_PROMPT_TEMPLATE = """\
Support documents:
{context}

Customer question: {question}
"""

_BLOCK_SEPARATOR = "\n\n---\n\n"


def format_context(texts: list[str], sources: list[str] | None = None) -> str:
    """Render chunks as numbered ``[Source n: name]`` blocks.

    A missing or short ``sources`` list leaves the remaining blocks unnamed.
    """
    blocks = []
    for number, (text, source) in enumerate(zip_longest(texts, sources or []), 1):
        if text is None:
            break
        header = f"[Source {number}: {source}]" if source else f"[Source {number}]"
        blocks.append(f"{header}\n{text}")
    return _BLOCK_SEPARATOR.join(blocks)


def build_rag_prompt(
    question: str,
    context_texts: list[str],
    sources: list[str] | None = None,
) -> str:
    return ANSWER_PROMPT_TEMPLATE.format(
        context=format_context(context_texts, sources),
        question=question,
    )
