"""
Chunking Dispatch Module

Single entry point that maps a ChunkConfig's strategy to the chunker that runs
it. Reserved strategies (semantic, sentence, recursive) are accepted and run as
token_based with a warning.

Components:
- get_chunker: Chunker instance for a configuration
- chunk_document: Chunk objects for a text
- chunk_text: Rendered chunk strings for a text
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .chunker import TokenChunker
from .config import ChunkConfig, ChunkStrategy
from .hybrid_chunker import HybridChunker, MarkdownChunker, render_chunks
from .result import HybridChunk

logger = logging.getLogger(__name__)

ConfigLike = Union[ChunkConfig, Dict[str, Any], None]

_CHUNKERS = {
    ChunkStrategy.TOKEN_BASED: TokenChunker,
    ChunkStrategy.MARKDOWN: MarkdownChunker,
    ChunkStrategy.HYBRID: HybridChunker,
}


def resolve_config(config: ConfigLike) -> ChunkConfig:
    """
    Accept a ChunkConfig, a plain mapping, or None (defaults).

    Raises:
        InvalidChunkConfigError: If a mapping cannot form a valid ChunkConfig
        TypeError: For any other type
    """
    if config is None:
        return ChunkConfig()
    if isinstance(config, ChunkConfig):
        return config
    if isinstance(config, dict):
        return ChunkConfig.from_dict(config)
    raise TypeError(f"Config must be ChunkConfig or dict, got: {type(config)}")


def get_chunker(config: ChunkConfig) -> Union[TokenChunker, MarkdownChunker]:
    """Build the chunker that runs config.strategy."""
    strategy = config.strategy
    if not strategy.is_implemented:
        logger.warning(f"Chunk strategy '{strategy}' is not yet implemented, using token_based")
    return _CHUNKERS[strategy.delegates_to](config)


def chunk_document(content: Optional[str], config: ConfigLike = None) -> List[HybridChunk]:
    """
    Chunk content and return the chunk objects.

    Args:
        content: Text to chunk; None, empty and whitespace-only input yield []
        config: Chunking configuration

    Returns:
        Chunks numbered 0..n-1 in source order
    """
    config = resolve_config(config)
    if not content or not content.strip():
        return []

    chunks = get_chunker(config).chunk_text(content)
    logger.debug(f"Chunked {len(content)} chars into {len(chunks)} chunks using {config.strategy}")
    return chunks


def chunk_text(content: Optional[str], config: ConfigLike = None) -> List[str]:
    """
    Chunk content into rendered strings.

    Chunks with a heading context are prefixed with ``[Context: ...]`` and a
    blank line.

    Example:
        >>> chunk_text("Hello world", ChunkConfig(chunk_size=100, overlap=0))
        ['Hello world']
    """
    return render_chunks(chunk_document(content, config))
