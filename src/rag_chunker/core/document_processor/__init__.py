"""
Document Processor Package

Turns raw document text into chunks ready for embedding.

Components:
- tokenizer: Character-based token estimation
- markdown_detection: Heuristic check for markdown syntax
- markdown_parser: Line-oriented structural parsing with heading context
- chunking/: Token, markdown and hybrid chunkers with strategy dispatch
"""

from .tokenizer import (
    CHARS_PER_TOKEN,
    estimate_tokens,
    char_offset_for_token_budget,
)

from .markdown_detection import (
    MarkdownIndicators,
    detect_markdown_indicators,
    looks_like_markdown,
)

from .markdown_parser import (
    ElementType,
    StructuralElement,
    HeadingStack,
    MarkdownStructureParser,
    parse_markdown_structure,
)

from .chunking import (
    ChunkStrategy,
    ChunkConfig,
    parse_chunk_strategy,
    HybridChunk,
    ChunkBoundary,
    TokenChunker,
    MarkdownChunker,
    HybridChunker,
    HybridChunkResult,
    split_oversized,
    merge_undersized,
    strip_non_ascii,
    chunk_document,
    chunk_text,
)

__all__ = [
    "CHARS_PER_TOKEN",
    "estimate_tokens",
    "char_offset_for_token_budget",
    "MarkdownIndicators",
    "detect_markdown_indicators",
    "looks_like_markdown",
    "ElementType",
    "StructuralElement",
    "HeadingStack",
    "MarkdownStructureParser",
    "parse_markdown_structure",
    "ChunkStrategy",
    "ChunkConfig",
    "parse_chunk_strategy",
    "HybridChunk",
    "ChunkBoundary",
    "TokenChunker",
    "MarkdownChunker",
    "HybridChunker",
    "HybridChunkResult",
    "split_oversized",
    "merge_undersized",
    "strip_non_ascii",
    "chunk_document",
    "chunk_text",
]
