"""
Chunking-related exceptions for the RAG chunker.

The chunking core does not raise for well-formed calls; these exceptions mark
the boundary where caller-supplied configuration is turned into a ChunkConfig,
and failures surfaced to command-line users.
"""

from typing import Any, Dict, List, Optional


class ChunkingError(Exception):
    """Base exception for chunking-related errors."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None) -> None:
        """
        Initialize chunking error.

        Args:
            message: Error description
            suggestions: List of suggested fixes
        """
        super().__init__(message)
        self.suggestions = suggestions or []

    def __str__(self) -> str:
        """Return formatted error message with suggestions."""
        msg = super().__str__()

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for i, suggestion in enumerate(self.suggestions, 1):
                msg += f"\n  {i}. {suggestion}"

        return msg


class InvalidChunkConfigError(ChunkingError):
    """Exception raised when values cannot form a valid ChunkConfig."""

    def __init__(self, message: str, config: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize invalid configuration error.

        Args:
            message: Error description
            config: The raw values that were rejected
        """
        suggestions = [
            "chunk_size must be a positive integer",
            "overlap must be a non-negative integer",
            "strategy must be one of: token_based, semantic, markdown, sentence, recursive, hybrid",
        ]
        super().__init__(message, suggestions)
        self.config = dict(config) if config else {}
