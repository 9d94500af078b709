"""Tests for TokenChunker - sliding-window token chunking."""

from unittest.mock import Mock

import pytest

from rag_chunker.core.document_processor.chunking import (
    ChunkConfig,
    TokenChunker,
    chunk_by_tokens,
    strip_non_ascii,
)
from rag_chunker.core.document_processor.chunking.chunker import skip_whitespace


class TestStripNonAscii:
    """Tests for non-ASCII replacement."""

    @pytest.mark.parametrize("text,expected", [
        (None, ""),
        ("", ""),
        ("plain ascii", "plain ascii"),
        ("naïve", "na ve"),
        ("aéééb", "a b"),
        ("ééabc", "abc"),
        ("café au", "caf  au"),
        ("日本語", ""),
    ])
    def test_replacement(self, text, expected):
        """Test runs collapse to one space and leading runs vanish."""
        assert strip_non_ascii(text) == expected


class TestSkipWhitespace:
    """Tests for skip_whitespace."""

    def test_skips_run(self):
        """Test position moves past spaces, tabs, newlines and carriage returns."""
        assert skip_whitespace("  \t\r\nx", 0) == 5

    def test_custom_characters(self):
        """Test only the given characters are skipped."""
        assert skip_whitespace(" \rx", 0, (' ',)) == 1

    def test_stops_at_end(self):
        """Test position never passes the end of the text."""
        assert skip_whitespace("ab   ", 2) == 5


class TestTokenChunker:
    """Tests for TokenChunker.chunk_text."""

    def test_requires_chunk_config(self):
        """Test a plain dict is rejected."""
        with pytest.raises(TypeError):
            TokenChunker({"chunk_size": 50})

    @pytest.mark.parametrize("text", [None, "", "   \n\t  "])
    def test_empty_and_blank_input(self, text):
        """Test empty and whitespace-only text yield no chunks."""
        assert TokenChunker(ChunkConfig(chunk_size=50, overlap=0)).chunk_text(text) == []

    def test_short_text_is_single_chunk(self):
        """Test text within budget is returned unchanged as one chunk."""
        chunks = TokenChunker(ChunkConfig(chunk_size=100, overlap=0)).chunk_text("Hello world")
        assert len(chunks) == 1
        assert chunks[0].content == "Hello world"
        assert chunks[0].token_estimate == 3
        assert chunks[0].heading_context is None

    def test_windows_cut_at_word_boundaries(self, numbered_words):
        """Test windows without overlap tile the text at spaces."""
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=0)).chunk_text(numbered_words)
        contents = [chunk.content for chunk in chunks]

        assert len(chunks) == 7
        assert contents[0].endswith("w030")
        assert contents[1].startswith("w031")
        assert " ".join(contents) == numbered_words
        assert [chunk.sequence_index for chunk in chunks] == list(range(7))

    def test_overlap_repeats_trailing_words(self, numbered_words):
        """Test the next window starts inside the previous one at a word start."""
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=10)).chunk_text(numbered_words)
        assert chunks[1].content.startswith("w024")
        assert "w024" in chunks[0].content
        assert chunks[-1].content.endswith("w199")

    def test_overlap_tail_after_last_window(self, numbered_words):
        """Test the overlap region of the final window is emitted once more."""
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=10)).chunk_text(numbered_words)
        tail = " ".join(f"w{i:03d}" for i in range(193, 200))

        assert len(chunks) == 9
        assert chunks[-2].content.startswith("w168")
        assert chunks[-2].content.endswith(tail)
        assert chunks[-1].content == tail
        assert chunks[-1].token_estimate == 9

    def test_chunks_stay_near_budget(self, numbered_words):
        """Test no chunk exceeds the window plus the search margin."""
        config = ChunkConfig(chunk_size=50, overlap=10)
        for chunk in TokenChunker(config).chunk_text(numbered_words):
            assert len(chunk.content) <= config.chunk_size * 4 + 50

    def test_overlap_not_less_than_chunk_disables_overlap(self, numbered_words):
        """Test an overlap as large as a chunk behaves like no overlap."""
        no_overlap = chunk_by_tokens(numbered_words, ChunkConfig(chunk_size=50, overlap=0))
        large_overlap = chunk_by_tokens(numbered_words, ChunkConfig(chunk_size=50, overlap=50))
        assert [c.content for c in large_overlap] == [c.content for c in no_overlap]

    def test_leading_whitespace_skipped(self):
        """Test the first window starts at the first non-whitespace character."""
        text = "\n\n  " + "x" * 400
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=0)).chunk_text(text)
        assert chunks[0].content == "x" * 200
        assert len(chunks) == 2

    def test_non_ascii_text_without_stripping(self):
        """Test multi-byte characters are never split and counted per character."""
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=0)).chunk_text("é" * 1000)
        assert [len(chunk.content) for chunk in chunks] == [200] * 5

    def test_strip_non_ascii_applied_before_chunking(self):
        """Test stripping happens before the budget check."""
        config = ChunkConfig(chunk_size=50, overlap=0, strip_non_ascii=True)
        assert TokenChunker(config).chunk_text("é" * 1000) == []
        chunks = TokenChunker(config).chunk_text("caféé olé")
        assert chunks[0].content == "caf  ol "

    def test_forced_progress_when_boundary_returns_zero(self):
        """Test a zero break offset falls back to the target offset."""
        boundary = Mock()
        boundary.find_break.return_value = 0
        chunker = TokenChunker(ChunkConfig(chunk_size=50, overlap=0), boundary_detector=boundary)

        chunks = chunker.chunk_text("x" * 1000)

        assert [len(chunk.content) for chunk in chunks] == [200] * 5
        assert boundary.find_break.call_count == 5

    def test_paragraph_break_preferred(self):
        """Test windows end at a blank line when one is in range."""
        text = "a" * 180 + "\n\n" + "b" * 300
        chunks = TokenChunker(ChunkConfig(chunk_size=50, overlap=0)).chunk_text(text)
        assert chunks[0].content == "a" * 180 + "\n"
        assert chunks[1].content.startswith("b")
