"""
Chunk row bookkeeping for hosts that persist chunks.

A source document is chunked into rows keyed by a stable source_id and a
0-based chunk_index. When the source changes it is chunked again; rows whose
index is no longer produced must be deleted.
"""

import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional

from .document_processor.chunking.dispatcher import ConfigLike, chunk_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChunkRecord:
    """
    One stored chunk.

    Attributes:
        source_id: Identifier of the source row or document
        chunk_index: Position of the chunk within the source (0-based)
        content: Rendered chunk text, context prefix included
        token_estimate: Estimated tokens of the chunk content
    """
    source_id: str
    chunk_index: int
    content: str
    token_estimate: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def build_chunk_records(
    source_id: str,
    content: Optional[str],
    config: ConfigLike = None
) -> List[ChunkRecord]:
    """
    Chunk content and wrap each chunk as a ChunkRecord.

    Args:
        source_id: Identifier stored on every record
        content: Source text
        config: Chunking configuration

    Returns:
        Records numbered from 0 in source order
    """
    chunks = chunk_document(content, config)
    records = [
        ChunkRecord(
            source_id=source_id,
            chunk_index=index,
            content=chunk.render(),
            token_estimate=chunk.token_estimate,
        )
        for index, chunk in enumerate(chunks)
    ]
    logger.debug(f"Built {len(records)} chunk records for source {source_id}")
    return records


def stale_chunk_indices(previous_count: int, new_count: int) -> range:
    """
    Indices of rows left over after a source was re-chunked.

    Example:
        >>> list(stale_chunk_indices(5, 3))
        [3, 4]
    """
    if previous_count < 0 or new_count < 0:
        raise ValueError(f"Chunk counts cannot be negative: {previous_count}, {new_count}")
    return range(new_count, max(previous_count, new_count))
