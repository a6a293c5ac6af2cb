"""Shared fixtures for tests — synthetic support documents, no network calls."""

from __future__ import annotations

import asyncio
import hashlib
import re
import textwrap
from pathlib import Path

import numpy as np
import pytest

from docstore.embeddings.base import EmbeddingProvider
from docstore.llm.base import LLMProvider
from docstore.vectorstore.memory_store import InMemoryVectorStore

DIM = 64

# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


class MockEmbedder(EmbeddingProvider):
    """Deterministic bag-of-words embedder.

    Each lowercase word is hashed into one of ``dim`` buckets, so texts that
    share words get a higher cosine similarity and identical texts score 1.0.
    Text without any word characters embeds to the zero vector.
    """

    def __init__(
        self,
        dim: int = DIM,
        fail_on_call: int | None = None,
        delay: float = 0.0,
    ):
        self._dim = dim
        self.fail_on_call = fail_on_call
        self.delay = delay
        self.calls = 0

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        await self._tick()
        return [self._embed(t) for t in texts]

    async def embed_query(self, query: str) -> list[float]:
        await self._tick()
        return self._embed(query)

    @property
    def dimension(self) -> int:
        return self._dim

    async def _tick(self) -> None:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail_on_call is not None and self.calls == self.fail_on_call:
            raise RuntimeError(f"mock provider failure on call {self.calls}")

    def _embed(self, text: str) -> list[float]:
        vec = np.zeros(self._dim, dtype=np.float64)
        for word in re.findall(r"\w+", text.lower()):
            bucket = int(hashlib.sha256(word.encode()).hexdigest(), 16) % self._dim
            vec[bucket] += 1.0
        return vec.tolist()


class MockLLM(LLMProvider):
    def __init__(self, answer: str = "Refunds are issued within 14 days [Source 1].",
                 fail: bool = False):
        self.model = "mock-llm"
        self.answer = answer
        self.fail = fail
        self.prompts: list[str] = []

    async def generate(self, prompt: str, system: str | None = None) -> str:
        self.prompts.append(prompt)
        if self.fail:
            raise RuntimeError("LLM quota exceeded")
        return self.answer


@pytest.fixture
def mock_embedder() -> MockEmbedder:
    return MockEmbedder()


@pytest.fixture
def embedder_factory():
    """Build ``MockEmbedder`` instances with custom failure behaviour."""
    return MockEmbedder


@pytest.fixture
def mock_llm() -> MockLLM:
    return MockLLM()


@pytest.fixture
def failing_llm() -> MockLLM:
    return MockLLM(fail=True)


@pytest.fixture
def store(mock_embedder: MockEmbedder) -> InMemoryVectorStore:
    return InMemoryVectorStore(embedding_provider=mock_embedder)


# ---------------------------------------------------------------------------
# Synthetic document content
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_faq_text() -> str:
    return textwrap.dedent("""\
        Acme Broadband — Customer Support FAQ

        Refund policy

        Customers can request a refund within 14 days of purchase. Refunds are
        returned to the original payment method and usually arrive within five
        business days. Installation fees are not refundable once a technician
        has visited the premises.

        Router troubleshooting

        If the router status light blinks red, unplug the power cable, wait
        thirty seconds and plug it back in. If the light is still red after
        five minutes, check the fibre cable connection and contact support.

        Billing questions

        Invoices are sent on the first day of each month. Payment is due within
        fourteen days. Late payments incur a reminder fee of five euros. You can
        change your billing address in the customer portal under Account.

        Moving house

        Tell us at least two weeks before you move. We will check availability
        at the new address and schedule a technician visit if needed.
    """)


@pytest.fixture
def sample_txt_file(tmp_path: Path, sample_faq_text: str) -> Path:
    p = tmp_path / "faq.txt"
    p.write_text(sample_faq_text, encoding="utf-8")
    return p


@pytest.fixture
def sample_md_file(tmp_path: Path) -> Path:
    p = tmp_path / "pricing.md"
    p.write_text(
        "# Pricing\n\n"
        "## Fibre 500\n\nMonthly price 39.90 euros, no fixed-term contract.\n\n"
        "## Fibre 1000\n\nMonthly price 49.90 euros, includes a Wi-Fi 6 router.\n",
        encoding="utf-8",
    )
    return p


@pytest.fixture
def sample_json_file(tmp_path: Path) -> Path:
    p = tmp_path / "opening_hours.json"
    p.write_text(
        '{"support": {"weekdays": "08:00-20:00", "weekends": "10:00-16:00"},'
        ' "phone": "+358 10 123 4567"}',
        encoding="utf-8",
    )
    return p


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Create a two-page PDF using fpdf2."""
    from fpdf import FPDF

    pdf = FPDF()
    pdf.set_auto_page_break(auto=True, margin=15)

    pdf.add_page()
    pdf.set_font("Helvetica", size=12)
    pdf.multi_cell(0, 10, text=(
        "Warranty terms\n\n"
        "All routers carry a two year warranty. Faulty devices are "
        "replaced free of charge when returned in the original packaging."
    ))

    pdf.add_page()
    pdf.multi_cell(0, 10, text=(
        "Returns\n\n"
        "Return shipping labels can be printed from the customer portal. "
        "Returned devices must be posted within 14 days."
    ))

    return bytes(pdf.output())


@pytest.fixture
def sample_pdf_file(tmp_path: Path, sample_pdf_bytes: bytes) -> Path:
    p = tmp_path / "warranty.pdf"
    p.write_bytes(sample_pdf_bytes)
    return p


@pytest.fixture
def corrupt_pdf_bytes() -> bytes:
    return b"%PDF-1.4\nthis is not really a pdf document\n%%EOF"
