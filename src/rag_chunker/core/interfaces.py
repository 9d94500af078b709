"""
Abstract interfaces for the systems that consume chunks.

The chunker performs no I/O. Hosts that store chunks or embed them implement
these interfaces; nothing in this package ships a concrete implementation.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Sequence

from .records import ChunkRecord


class EmbeddingProvider(ABC):
    """
    Abstract base class for embedding providers.

    Implementations wrap a local model or a remote API. They are called by a
    worker process once a chunk has been stored, never by the chunker itself.
    """

    @abstractmethod
    def generate(self, text: str) -> List[float]:
        """
        Generate an embedding for a single text.

        Args:
            text: Rendered chunk text

        Returns:
            Embedding vector
        """

    @abstractmethod
    def generate_batch(self, texts: Sequence[str]) -> List[List[float]]:
        """
        Generate embeddings for several texts.

        Returns:
            One embedding vector per input text, in input order
        """


class ChunkSink(ABC):
    """
    Abstract base class for chunk persistence.

    A sink stores one row per chunk keyed by (source_id, chunk_index). After a
    source is re-chunked the host writes the new records and deletes the rows
    reported by stale_chunk_indices.
    """

    @abstractmethod
    def write(self, records: Iterable[ChunkRecord]) -> None:
        """Insert or replace the given chunk rows."""

    @abstractmethod
    def delete(self, source_id: str, indices: Iterable[int]) -> None:
        """Remove rows for source_id at the given chunk indices."""
