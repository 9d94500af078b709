"""
Hybrid Chunker Module - Structure-aware Chunking

This module implements the two structure-aware strategies:

- MarkdownChunker: one chunk per structural element, splitting only elements
  that are individually larger than chunk_size
- HybridChunker: the same element-derived chunks, refined by a split pass and
  then a merge pass so small sibling sections under one heading end up together

Both first ask the markdown likelihood detector whether the input is markdown at
all. When it is not, they hand the text to the TokenChunker unchanged and no
heading context is ever attached.

Usage:
    >>> config = ChunkConfig(strategy=ChunkStrategy.HYBRID, chunk_size=200)
    >>> result = HybridChunker(config).chunk_document("# Title\\n\\nBody text.")
    >>> result.rendered()
    ['[Context: # Title]\\n\\n# Title\\n\\nBody text.']
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .chunker import TokenChunker
from .config import ChunkConfig, ChunkStrategy
from .refiner import INLINE_SPLIT_WHITESPACE, merge_undersized, split_content, split_oversized
from .result import HybridChunk, assign_sequence_indices
from ..markdown_detection import looks_like_markdown
from ..markdown_parser import ElementType, MarkdownStructureParser, StructuralElement

logger = logging.getLogger(__name__)


@dataclass
class HybridChunkResult:
    """
    Result of a structure-aware chunking call.

    Attributes:
        chunks: Final chunks in output order
        elements: Structural elements the chunks were built from (empty on fallback)
        used_fallback: True when the text was not markdown and token chunking ran
        processing_stats: Counts and timing for the call
    """
    chunks: List[HybridChunk] = field(default_factory=list)
    elements: List[StructuralElement] = field(default_factory=list)
    used_fallback: bool = False
    processing_stats: Dict[str, Any] = field(default_factory=dict)

    def rendered(self) -> List[str]:
        """Chunk texts with their context prefixes applied."""
        return render_chunks(self.chunks)


def render_chunks(chunks: List[HybridChunk]) -> List[str]:
    """Render each chunk to its output string."""
    return [chunk.render() for chunk in chunks]


def elements_to_chunks(elements: List[StructuralElement]) -> List[HybridChunk]:
    """
    Turn structural elements into chunks one-to-one.

    Horizontal rules and blank elements carry no content and are dropped.
    """
    chunks = []
    for element in elements:
        if element.kind == ElementType.HORIZONTAL_RULE:
            continue
        if not element.content.strip():
            continue
        chunks.append(HybridChunk(
            content=element.content,
            token_estimate=element.token_estimate,
            heading_context=element.heading_context,
        ))
    return chunks


class MarkdownChunker:
    """
    Structure-only chunker: one chunk per structural element.

    Elements above chunk_size are split inline at break points; no merging is
    attempted, so short elements stay short.

    Attributes:
        config: ChunkConfig instance with chunking preferences
        parser: MarkdownStructureParser used for each document
        fallback_chunker: TokenChunker used for non-markdown text

    Example:
        >>> chunker = MarkdownChunker(ChunkConfig(strategy=ChunkStrategy.MARKDOWN, chunk_size=100))
        >>> chunker.chunk_document("# Title\\n\\nBody text.").rendered()
        ['[Context: # Title]\\n\\n# Title', '[Context: # Title]\\n\\nBody text.']
    """

    strategy_name = ChunkStrategy.MARKDOWN.value

    def __init__(self, config: ChunkConfig) -> None:
        """
        Initialize chunker with configuration and component setup.

        Raises:
            TypeError: If config is not a ChunkConfig instance
        """
        if not isinstance(config, ChunkConfig):
            raise TypeError(f"Config must be ChunkConfig, got: {type(config)}")

        self.config = config
        self.parser = MarkdownStructureParser(model=config.model)
        self.fallback_chunker = TokenChunker(config)

        logger.debug(f"{type(self).__name__} initialized with chunk_size={config.chunk_size}")

    def chunk_document(self, document_content: Optional[str]) -> HybridChunkResult:
        """
        Chunk a document, falling back to token chunking for non-markdown text.

        Args:
            document_content: Raw document text

        Returns:
            HybridChunkResult with numbered chunks
        """
        if not document_content or not document_content.strip():
            return HybridChunkResult()

        start_time = time.perf_counter()

        if not looks_like_markdown(document_content):
            logger.debug(f"Input does not look like markdown, {self.strategy_name} falling back to token_based")
            chunks = self.fallback_chunker.chunk_text(document_content)
            return HybridChunkResult(
                chunks=chunks,
                used_fallback=True,
                processing_stats=self._stats(chunks, [], start_time),
            )

        elements = self.parser.parse(document_content)
        logger.debug(f"Parsed {len(elements)} structural elements")

        chunks = assign_sequence_indices(self._refine(elements_to_chunks(elements)))
        logger.debug(f"{self.strategy_name} chunking complete: {len(chunks)} chunks")

        return HybridChunkResult(
            chunks=chunks,
            elements=elements,
            processing_stats=self._stats(chunks, elements, start_time),
        )

    def chunk_text(self, text: Optional[str]) -> List[HybridChunk]:
        """Chunk text and return the chunk objects only."""
        return self.chunk_document(text).chunks

    def _refine(self, chunks: List[HybridChunk]) -> List[HybridChunk]:
        result: List[HybridChunk] = []
        chunk_size = self.config.chunk_size
        model = self.config.model

        for chunk in chunks:
            if chunk.token_estimate <= chunk_size:
                result.append(chunk)
                continue
            for fragment in split_content(chunk.content, chunk_size, model, INLINE_SPLIT_WHITESPACE):
                result.append(HybridChunk.create(fragment, chunk.heading_context, model))

        return result

    def _stats(
        self,
        chunks: List[HybridChunk],
        elements: List[StructuralElement],
        start_time: float
    ) -> Dict[str, Any]:
        return {
            'strategy': self.strategy_name,
            'processing_time_ms': round((time.perf_counter() - start_time) * 1000, 3),
            'total_chunks': len(chunks),
            'elements_parsed': len(elements),
            'total_tokens': sum(chunk.token_estimate for chunk in chunks),
        }


class HybridChunker(MarkdownChunker):
    """
    Structure-aware chunker with size refinement.

    Element-derived chunks go through split_oversized (max chunk_size tokens)
    and then merge_undersized (min_tokens from the config), so adjacent pieces
    under the same heading context are combined while they fit.

    Example:
        >>> config = ChunkConfig(strategy=ChunkStrategy.HYBRID, chunk_size=200)
        >>> HybridChunker(config).chunk_text("# A\\n\\nOne.\\n\\nTwo.")[0].content
        '# A\\n\\nOne.\\n\\nTwo.'
    """

    strategy_name = ChunkStrategy.HYBRID.value

    def _refine(self, chunks: List[HybridChunk]) -> List[HybridChunk]:
        chunk_size = self.config.chunk_size
        model = self.config.model

        split = split_oversized(chunks, chunk_size, model)
        return merge_undersized(split, self.config.min_tokens, chunk_size, model)
