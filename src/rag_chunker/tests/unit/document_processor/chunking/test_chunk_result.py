"""Tests for HybridChunk - the chunk container."""

import pytest

from rag_chunker.core.document_processor.chunking import HybridChunk
from rag_chunker.core.document_processor.chunking.result import assign_sequence_indices


class TestHybridChunk:
    """Tests for HybridChunk creation, merging and rendering."""

    def test_create_computes_estimate(self):
        """Test create fills in the token estimate."""
        chunk = HybridChunk.create("Hello world", "# Title")
        assert chunk.token_estimate == 3
        assert chunk.heading_context == "# Title"
        assert chunk.sequence_index == 0

    def test_empty_content_rejected(self):
        """Test chunks cannot be empty."""
        with pytest.raises(ValueError, match="cannot be empty"):
            HybridChunk(content="")

    def test_non_string_content_rejected(self):
        """Test content must be a string."""
        with pytest.raises(ValueError):
            HybridChunk(content=42)

    def test_negative_fields_rejected(self):
        """Test negative estimates and indices are invalid."""
        with pytest.raises(ValueError):
            HybridChunk(content="x", token_estimate=-1)
        with pytest.raises(ValueError):
            HybridChunk(content="x", sequence_index=-1)

    def test_render_with_context(self):
        """Test context prefix format."""
        chunk = HybridChunk.create("Body text.", "# A > ## B")
        assert chunk.render() == "[Context: # A > ## B]\n\nBody text."

    @pytest.mark.parametrize("context", [None, ""])
    def test_render_without_context(self, context):
        """Test chunks without context render as their content."""
        assert HybridChunk.create("Body text.", context).render() == "Body text."

    def test_absorb_joins_with_blank_line(self):
        """Test absorbing appends content and recomputes the estimate."""
        first = HybridChunk.create("a" * 20, "# A")
        second = HybridChunk.create("b" * 20, "# A")
        first.absorb(second)
        assert first.content == "a" * 20 + "\n\n" + "b" * 20
        assert first.token_estimate == 11
        assert first.heading_context == "# A"

    def test_absorb_rejects_different_context(self):
        """Test chunks under different headings cannot merge."""
        first = HybridChunk.create("one", "# A")
        with pytest.raises(ValueError, match="different heading contexts"):
            first.absorb(HybridChunk.create("two", "# B"))

    def test_same_context_when_both_none(self):
        """Test two context-free chunks share a context."""
        assert HybridChunk.create("one").has_same_context(HybridChunk.create("two")) is True
        assert HybridChunk.create("one").has_same_context(HybridChunk.create("two", "# A")) is False

    def test_to_dict(self):
        """Test dictionary form includes rendered text."""
        data = HybridChunk.create("Body", "# T").to_dict()
        assert data == {
            "chunk_index": 0,
            "content": "Body",
            "token_estimate": 1,
            "heading_context": "# T",
            "rendered": "[Context: # T]\n\nBody",
        }


class TestAssignSequenceIndices:
    """Tests for assign_sequence_indices."""

    def test_numbers_in_order(self):
        """Test chunks are numbered 0..n-1 in place."""
        chunks = [HybridChunk.create(text) for text in ("a", "b", "c")]
        chunks[2].sequence_index = 9
        result = assign_sequence_indices(chunks)
        assert result is chunks
        assert [chunk.sequence_index for chunk in chunks] == [0, 1, 2]
