"""Tests for chunker implementations and the chunker factory."""

from __future__ import annotations

import pytest

from docstore.chunking.base import BaseChunker
from docstore.chunking.factory import available_chunkers, clear_cache, get_chunker
from docstore.chunking.fixed_chunker import FixedWindowChunker
from docstore.chunking.recursive_chunker import RecursiveChunker
from docstore.chunking.schemas import ChunkDraft


def _reassemble(pieces: list[str], overlap: int) -> str:
    """Rebuild the source text from overlapping windows."""
    if not pieces:
        return ""
    return pieces[0] + "".join(p[overlap:] for p in pieces[1:])


# ---------------------------------------------------------------------------
# FixedWindowChunker
# ---------------------------------------------------------------------------


class TestFixedWindowChunker:
    @pytest.fixture
    def chunker(self) -> FixedWindowChunker:
        return FixedWindowChunker()

    def test_defaults(self, chunker: FixedWindowChunker):
        assert chunker.chunk_size == 1000
        assert chunker.chunk_overlap == 200

    def test_window_positions(self, chunker: FixedWindowChunker):
        text = "abcdefghij" * 250  # 2500 chars
        pieces = chunker.split(text)
        assert pieces == [text[0:1000], text[800:1800], text[1600:2500]]
        assert len(pieces[-1]) == 900

    def test_short_text_single_chunk(self, chunker: FixedWindowChunker):
        assert chunker.split("Reset your router.") == ["Reset your router."]

    def test_exact_size_single_chunk(self, chunker: FixedWindowChunker):
        text = "x" * 1000
        assert chunker.split(text) == [text]

    def test_one_past_size(self, chunker: FixedWindowChunker):
        text = "y" * 1001
        pieces = chunker.split(text)
        assert len(pieces) == 2
        assert pieces[1] == text[800:]

    def test_empty_text(self, chunker: FixedWindowChunker):
        assert chunker.split("") == []
        assert chunker.chunk("", source="empty.txt") == []

    def test_whitespace_windows_skipped(self):
        chunker = FixedWindowChunker(chunk_size=10, chunk_overlap=0)
        text = "hello" + " " * 25 + "world"
        assert chunker.split(text) == ["hello     ", "world"]

    def test_coverage_and_overlap(self, sample_faq_text: str):
        chunker = FixedWindowChunker(chunk_size=200, chunk_overlap=50)
        pieces = chunker.split(sample_faq_text)
        assert len(pieces) > 3
        assert all(len(p) <= 200 for p in pieces)
        for prev, nxt in zip(pieces, pieces[1:]):
            assert prev[-50:] == nxt[:50]
        assert _reassemble(pieces, 50) == sample_faq_text

    def test_chunk_numbering(self, sample_faq_text: str):
        chunker = FixedWindowChunker(chunk_size=300, chunk_overlap=30)
        drafts = chunker.chunk(sample_faq_text, source="faq.txt")
        assert [d.chunk_index for d in drafts] == list(range(len(drafts)))
        assert all(d.source == "faq.txt" for d in drafts)
        assert all(isinstance(d, ChunkDraft) for d in drafts)

    def test_zero_overlap(self):
        chunker = FixedWindowChunker(chunk_size=4, chunk_overlap=0)
        assert chunker.split("abcdefghij") == ["abcd", "efgh", "ij"]


class TestChunkerValidation:
    @pytest.mark.parametrize(
        ("size", "overlap"),
        [(100, 100), (100, 150), (100, -1), (0, 0)],
    )
    def test_invalid_parameters(self, size: int, overlap: int):
        with pytest.raises(ValueError):
            FixedWindowChunker(chunk_size=size, chunk_overlap=overlap)
        with pytest.raises(ValueError):
            RecursiveChunker(chunk_size=size, chunk_overlap=overlap)

    def test_is_base_chunker(self):
        assert issubclass(FixedWindowChunker, BaseChunker)
        assert issubclass(RecursiveChunker, BaseChunker)

    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            BaseChunker()  # type: ignore[abstract]


# ---------------------------------------------------------------------------
# RecursiveChunker
# ---------------------------------------------------------------------------


class TestRecursiveChunker:
    @pytest.fixture
    def chunker(self) -> RecursiveChunker:
        return RecursiveChunker(chunk_size=200, chunk_overlap=40)

    def test_respects_size(self, chunker: RecursiveChunker, sample_faq_text: str):
        pieces = chunker.split(sample_faq_text)
        assert len(pieces) > 1
        assert all(len(p) <= 200 for p in pieces)

    def test_coverage_and_overlap(self, chunker: RecursiveChunker, sample_faq_text: str):
        pieces = chunker.split(sample_faq_text)
        for prev, nxt in zip(pieces, pieces[1:]):
            assert prev[-40:] == nxt[:40]
        assert _reassemble(pieces, 40) == sample_faq_text

    def test_prefers_paragraph_breaks(self):
        chunker = RecursiveChunker(chunk_size=60, chunk_overlap=5)
        text = "First paragraph about refunds.\n\nSecond paragraph about routers and more."
        pieces = chunker.split(text)
        assert pieces[0] == "First paragraph about refunds.\n\n"

    def test_hard_cut_without_separators(self):
        chunker = RecursiveChunker(chunk_size=10, chunk_overlap=2)
        text = "x" * 25
        pieces = chunker.split(text)
        assert pieces[0] == "x" * 10
        assert _reassemble(pieces, 2) == text

    def test_short_text(self, chunker: RecursiveChunker):
        assert chunker.split("Short answer.") == ["Short answer."]


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


class TestChunkerFactory:
    def setup_method(self):
        clear_cache()

    def test_available_chunkers(self):
        assert available_chunkers() == ["fixed", "recursive"]

    def test_default_is_fixed(self):
        assert isinstance(get_chunker(), FixedWindowChunker)

    def test_get_recursive_with_kwargs(self):
        chunker = get_chunker("recursive", chunk_size=500, chunk_overlap=50)
        assert isinstance(chunker, RecursiveChunker)
        assert chunker.chunk_size == 500

    def test_singleton_without_kwargs(self):
        assert get_chunker("fixed") is get_chunker("FIXED")

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown chunking strategy"):
            get_chunker("semantic")
