"""
Chunking Package - Document Chunking Components

This package splits text into bounded-size chunks for embedding, either with a
token sliding window or by following markdown structure.

Components:
- ChunkStrategy: Enumeration of chunking strategies
- ChunkConfig: Immutable per-call chunking configuration
- HybridChunk: Chunk container with optional heading context
- ChunkBoundary: Break-point finder
- TokenChunker: Sliding-window token chunker
- MarkdownChunker / HybridChunker: Structure-aware chunkers
- split_oversized / merge_undersized: Size refinement passes
- chunk_text / chunk_document: Strategy dispatch
"""

from .config import (
    ChunkStrategy,
    ChunkConfig,
    parse_chunk_strategy,
)

from .result import HybridChunk

from .boundary import BreakType, ChunkBoundary, find_break

from .chunker import TokenChunker, chunk_by_tokens, strip_non_ascii

from .refiner import split_oversized, merge_undersized

from .hybrid_chunker import HybridChunker, HybridChunkResult, MarkdownChunker, render_chunks

from .dispatcher import chunk_document, chunk_text, get_chunker

__all__ = [
    "ChunkStrategy",
    "ChunkConfig",
    "parse_chunk_strategy",
    "HybridChunk",
    "BreakType",
    "ChunkBoundary",
    "find_break",
    "TokenChunker",
    "chunk_by_tokens",
    "strip_non_ascii",
    "split_oversized",
    "merge_undersized",
    "MarkdownChunker",
    "HybridChunker",
    "HybridChunkResult",
    "render_chunks",
    "chunk_document",
    "chunk_text",
    "get_chunker",
]
