"""
Token Chunker Module

Contains the TokenChunker class - the sliding-window chunker used for the
token_based strategy and as the fallback whenever structure-aware strategies
decide the input is not markdown.
"""

import logging
from typing import List, Optional

from .boundary import ChunkBoundary
from .config import ChunkConfig
from .result import HybridChunk, assign_sequence_indices
from ..tokenizer import char_offset_for_token_budget, estimate_tokens

logger = logging.getLogger(__name__)

SKIPPABLE_WHITESPACE = (' ', '\t', '\n', '\r')
OVERLAP_STOP_CHARS = (' ', '\n', '\t')


def strip_non_ascii(text: Optional[str]) -> str:
    """
    Replace each run of non-ASCII characters with at most one space.

    A non-ASCII character becomes a space only when the output so far is
    non-empty and does not already end in a space, so leading runs vanish and
    interior runs collapse into one separator.

    Example:
        >>> strip_non_ascii("na\\u00efve")
        'na ve'
    """
    if not text:
        return ""

    output: List[str] = []
    for char in text:
        if ord(char) < 128:
            output.append(char)
        elif output and output[-1] != ' ':
            output.append(' ')
    return ''.join(output)


def skip_whitespace(text: str, position: int, chars=SKIPPABLE_WHITESPACE) -> int:
    """Advance position past any run of the given whitespace characters."""
    while position < len(text) and text[position] in chars:
        position += 1
    return position


class TokenChunker:
    """
    Sliding-window chunker over estimated token counts.

    Each window is cut at the best break point near chunk_size tokens. When an
    overlap is configured, the next window starts inside the previous one at a
    word boundary so roughly ``overlap`` tokens are repeated.

    Attributes:
        config: ChunkConfig with chunk_size, overlap and strip_non_ascii
        boundary_detector: ChunkBoundary used to choose cut positions

    Example:
        >>> chunker = TokenChunker(ChunkConfig(chunk_size=100, overlap=0))
        >>> [chunk.content for chunk in chunker.chunk_text("Hello world")]
        ['Hello world']
    """

    def __init__(self, config: ChunkConfig, boundary_detector: Optional[ChunkBoundary] = None) -> None:
        """
        Initialize token chunker with configuration.

        Raises:
            TypeError: If config is not a ChunkConfig instance
        """
        if not isinstance(config, ChunkConfig):
            raise TypeError(f"Config must be ChunkConfig, got: {type(config)}")

        self.config = config
        self.boundary_detector = boundary_detector or ChunkBoundary()

    def chunk_text(self, text: Optional[str]) -> List[HybridChunk]:
        """
        Chunk text into sliding-window chunks.

        Args:
            text: Text content to chunk

        Returns:
            List of HybridChunk objects without heading context; empty for
            empty or whitespace-only input
        """
        if not text:
            return []

        if self.config.strip_non_ascii:
            text = strip_non_ascii(text)

        if not text.strip():
            return []

        model = self.config.model
        total_tokens = estimate_tokens(text, model)
        logger.debug(
            f"Token chunking: {len(text)} chars, {total_tokens} estimated tokens, "
            f"chunk_size={self.config.chunk_size}, overlap={self.config.overlap}"
        )

        if total_tokens <= self.config.chunk_size:
            return assign_sequence_indices([HybridChunk(content=text, token_estimate=total_tokens)])

        chunks = self._sliding_window(text)
        logger.debug(f"Token chunking produced {len(chunks)} chunks")
        return assign_sequence_indices(chunks)

    def _sliding_window(self, text: str) -> List[HybridChunk]:
        chunks: List[HybridChunk] = []
        length = len(text)
        chunk_size = self.config.chunk_size
        overlap = self.config.overlap
        model = self.config.model

        position = skip_whitespace(text, 0)
        while position < length:
            remaining = length - position
            target_offset = char_offset_for_token_budget(text, chunk_size, model, start=position)
            end_offset = self.boundary_detector.find_break(text, target_offset, remaining, start=position)
            if end_offset <= 0:
                end_offset = target_offset if target_offset > 0 else remaining

            piece = text[position:position + end_offset]
            chunk_tokens = estimate_tokens(piece, model)
            chunks.append(HybridChunk(content=piece, token_estimate=chunk_tokens))
            logger.debug(
                f"Chunk {len(chunks) - 1}: offset={position}, length={end_offset}, tokens={chunk_tokens}"
            )

            position += self._advance(piece, chunk_tokens, overlap, model)
            position = skip_whitespace(text, position)

        return chunks

    @staticmethod
    def _advance(piece: str, chunk_tokens: int, overlap: int, model: Optional[str]) -> int:
        """Distance to the next window start, measured within the emitted piece."""
        if overlap <= 0 or overlap >= chunk_tokens:
            return len(piece)

        overlap_start = char_offset_for_token_budget(piece, chunk_tokens - overlap, model)
        while overlap_start < len(piece) and piece[overlap_start] not in OVERLAP_STOP_CHARS:
            overlap_start += 1

        if overlap_start <= 0 or overlap_start >= len(piece):
            return len(piece)
        return overlap_start


def chunk_by_tokens(text: Optional[str], config: ChunkConfig) -> List[HybridChunk]:
    """Chunk text with a fresh TokenChunker."""
    return TokenChunker(config).chunk_text(text)
