"""
Chunk Result Module

Contains the HybridChunk class, the emittable unit produced by every chunking
strategy. A chunk is created from one structural element, from a fragment of a
split, or from a token window, and may absorb neighbours during the merge pass.
Once handed to the caller it is only rendered, never changed.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..tokenizer import estimate_tokens

logger = logging.getLogger(__name__)

CONTEXT_PREFIX = "[Context: "
CONTEXT_SUFFIX = "]\n\n"
MERGE_SEPARATOR = "\n\n"


@dataclass
class HybridChunk:
    """
    A bounded-size text fragment with optional heading context.

    Attributes:
        content: Chunk text, never empty
        token_estimate: Estimated tokens in content, recomputed whenever content changes
        heading_context: Heading hierarchy the chunk was produced under, or None
        sequence_index: Position in the final output (0-based)

    Example:
        >>> chunk = HybridChunk.create("Body text.", "# Title")
        >>> chunk.render()
        '[Context: # Title]\\n\\nBody text.'
    """

    content: str
    token_estimate: int = 0
    heading_context: Optional[str] = None
    sequence_index: int = 0

    def __post_init__(self) -> None:
        """
        Validate chunk data.

        Raises:
            ValueError: If chunk data is invalid
        """
        if not isinstance(self.content, str):
            raise ValueError(f"Content must be string, got: {type(self.content)}")

        if not self.content:
            raise ValueError("Chunk content cannot be empty")

        if self.token_estimate < 0:
            raise ValueError(f"token_estimate cannot be negative: {self.token_estimate}")

        if self.sequence_index < 0:
            raise ValueError(f"sequence_index cannot be negative: {self.sequence_index}")

    @classmethod
    def create(
        cls,
        content: str,
        heading_context: Optional[str] = None,
        model: Optional[str] = None
    ) -> "HybridChunk":
        """Create a chunk with its token estimate computed from content."""
        return cls(
            content=content,
            token_estimate=estimate_tokens(content, model),
            heading_context=heading_context,
        )

    def has_same_context(self, other: "HybridChunk") -> bool:
        """
        Check whether two chunks share a heading context.

        Contexts match when both are None or both are identical strings.
        """
        return self.heading_context == other.heading_context

    def absorb(self, other: "HybridChunk", model: Optional[str] = None) -> None:
        """
        Append another chunk's content, separated by a blank line.

        The token estimate is recomputed and the heading context kept.

        Raises:
            ValueError: If the chunks have different heading contexts
        """
        if not self.has_same_context(other):
            raise ValueError(
                f"Cannot merge chunks with different heading contexts: "
                f"{self.heading_context!r} != {other.heading_context!r}"
            )

        self.content = f"{self.content}{MERGE_SEPARATOR}{other.content}"
        self.token_estimate = estimate_tokens(self.content, model)

    def render(self) -> str:
        """
        Render the chunk as output text.

        A non-empty heading context is prepended as ``[Context: ...]`` followed
        by a blank line.
        """
        if self.heading_context:
            return f"{CONTEXT_PREFIX}{self.heading_context}{CONTEXT_SUFFIX}{self.content}"
        return self.content

    def to_dict(self) -> Dict[str, Any]:
        """Convert chunk to dictionary representation."""
        return {
            "chunk_index": self.sequence_index,
            "content": self.content,
            "token_estimate": self.token_estimate,
            "heading_context": self.heading_context,
            "rendered": self.render(),
        }


def assign_sequence_indices(chunks: List[HybridChunk]) -> List[HybridChunk]:
    """Number chunks 0..n-1 in list order and return the same list."""
    for index, chunk in enumerate(chunks):
        chunk.sequence_index = index
    return chunks
