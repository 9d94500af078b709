"""
Chunking Configuration Module

Contains the strategy enumeration and the immutable per-call configuration for
the chunking system. Configuration is always passed explicitly; nothing in the
chunking core reads process-wide settings.

Components:
- ChunkStrategy: Enumeration of chunking strategies, including reserved ones
- ChunkConfig: Validated configuration for a single chunking call
- parse_chunk_strategy: Lenient string-to-strategy conversion
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Optional, Union

from ....exceptions.chunking_exceptions import InvalidChunkConfigError

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 400
DEFAULT_OVERLAP = 50


class ChunkStrategy(Enum):
    """
    Enumeration of chunking strategies.

    SEMANTIC, SENTENCE and RECURSIVE are reserved names: they are accepted
    everywhere a strategy is, and currently delegate to TOKEN_BASED.
    """
    TOKEN_BASED = "token_based"
    SEMANTIC = "semantic"
    MARKDOWN = "markdown"
    SENTENCE = "sentence"
    RECURSIVE = "recursive"
    HYBRID = "hybrid"

    @property
    def is_implemented(self) -> bool:
        return self not in _RESERVED_STRATEGIES

    @property
    def delegates_to(self) -> "ChunkStrategy":
        """Strategy that actually runs for this one."""
        if self.is_implemented:
            return self
        return ChunkStrategy.TOKEN_BASED

    def __str__(self) -> str:
        return self.value


_RESERVED_STRATEGIES = frozenset({
    ChunkStrategy.SEMANTIC,
    ChunkStrategy.SENTENCE,
    ChunkStrategy.RECURSIVE,
})

_STRATEGY_ALIASES = {
    "token": ChunkStrategy.TOKEN_BASED,
}


def parse_chunk_strategy(value: Union[str, ChunkStrategy, None]) -> ChunkStrategy:
    """
    Convert a strategy name to ChunkStrategy.

    Matching is case-insensitive and ignores surrounding whitespace. None maps
    to TOKEN_BASED; unknown names log a warning and also map to TOKEN_BASED.

    Args:
        value: Strategy name or ChunkStrategy

    Returns:
        Parsed ChunkStrategy
    """
    if isinstance(value, ChunkStrategy):
        return value
    if value is None:
        return ChunkStrategy.TOKEN_BASED

    name = str(value).strip().lower()
    if name in _STRATEGY_ALIASES:
        return _STRATEGY_ALIASES[name]

    try:
        return ChunkStrategy(name)
    except ValueError:
        logger.warning(f"Unknown chunk strategy '{value}', defaulting to token_based")
        return ChunkStrategy.TOKEN_BASED


@dataclass(frozen=True)
class ChunkConfig:
    """
    Configuration for one chunking call.

    Attributes:
        strategy: Chunking strategy
        chunk_size: Target maximum tokens per chunk (> 0)
        overlap: Tokens of overlap between sliding-window chunks (>= 0)
        strip_non_ascii: Replace non-ASCII runs with a single space before
            token-based chunking
        model: Embedding model name handed to the token estimator

    Example:
        >>> config = ChunkConfig(strategy=ChunkStrategy.HYBRID, chunk_size=200, overlap=20)
        >>> config.min_tokens
        50
    """

    strategy: ChunkStrategy = ChunkStrategy.TOKEN_BASED
    chunk_size: int = DEFAULT_CHUNK_SIZE
    overlap: int = DEFAULT_OVERLAP
    strip_non_ascii: bool = False
    model: Optional[str] = None

    def __post_init__(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            TypeError: If strategy is not a ChunkStrategy
            ValueError: If chunk_size or overlap are out of range
        """
        if not isinstance(self.strategy, ChunkStrategy):
            raise TypeError(f"strategy must be ChunkStrategy enum, got: {type(self.strategy)}")

        if isinstance(self.chunk_size, bool) or not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive integer, got: {self.chunk_size}")

        if isinstance(self.overlap, bool) or not isinstance(self.overlap, int) or self.overlap < 0:
            raise ValueError(f"overlap must be non-negative integer, got: {self.overlap}")

        if self.overlap >= self.chunk_size:
            logger.warning(
                f"overlap ({self.overlap}) is not less than chunk_size ({self.chunk_size}); "
                f"sliding-window overlap will be disabled"
            )

    @property
    def min_tokens(self) -> int:
        """Merge threshold for undersized chunks: a quarter of chunk_size, at least 20."""
        return max(20, self.chunk_size // 4)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert configuration to dictionary for serialization.

        Returns:
            Dictionary representation with all configuration parameters
        """
        return {
            "strategy": self.strategy.value,
            "chunk_size": self.chunk_size,
            "overlap": self.overlap,
            "strip_non_ascii": self.strip_non_ascii,
            "model": self.model,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChunkConfig":
        """
        Create configuration from dictionary.

        Unknown keys are ignored. The strategy may be given by name.

        Args:
            data: Dictionary with configuration parameters

        Returns:
            ChunkConfig instance

        Raises:
            InvalidChunkConfigError: If values cannot form a valid configuration
        """
        known = {"strategy", "chunk_size", "overlap", "strip_non_ascii", "model"}
        kwargs = {key: value for key, value in data.items() if key in known}
        if "strategy" in kwargs:
            kwargs["strategy"] = parse_chunk_strategy(kwargs["strategy"])

        try:
            return cls(**kwargs)
        except (TypeError, ValueError) as e:
            raise InvalidChunkConfigError(
                f"Invalid chunking configuration: {e}",
                config=data
            ) from e

    def replace(self, **changes: Any) -> "ChunkConfig":
        """Copy of this configuration with some fields changed."""
        data = self.to_dict()
        data.update(changes)
        return ChunkConfig.from_dict(data)
