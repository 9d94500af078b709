"""
RAG chunker: split documents into context-tagged chunks for embedding.

Usage:
    >>> from rag_chunker import ChunkConfig, ChunkStrategy, chunk
    >>> chunk("# Title\\n\\nBody text.", ChunkConfig(strategy=ChunkStrategy.HYBRID))
    ['[Context: # Title]\\n\\n# Title\\n\\nBody text.']
"""

__version__ = "0.1.0"

from .core.document_processor.chunking import (
    ChunkConfig,
    ChunkStrategy,
    HybridChunk,
    chunk_document,
    chunk_text,
)

# The public entry point is chunk(content, config) -> list of strings.
chunk = chunk_text

__all__ = [
    "__version__",
    "ChunkConfig",
    "ChunkStrategy",
    "HybridChunk",
    "chunk",
    "chunk_document",
    "chunk_text",
]
