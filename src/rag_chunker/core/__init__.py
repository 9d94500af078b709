"""
Core modules for the RAG chunker.

This package contains the chunking engine and the record and interface types
used at the boundary with storage and embedding systems.
"""

from .records import (
    ChunkRecord,
    build_chunk_records,
    stale_chunk_indices,
)

from .interfaces import (
    EmbeddingProvider,
    ChunkSink,
)

__all__ = [
    "ChunkRecord",
    "build_chunk_records",
    "stale_chunk_indices",
    "EmbeddingProvider",
    "ChunkSink",
]
