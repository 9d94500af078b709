"""
Exceptions package for the RAG chunker.

This package contains custom exception classes for configuration loading and
chunking configuration errors.
"""

from .config_exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
    ConfigurationValidationError,
    EnvironmentVariableError,
    ConfigurationSchemaError,
)

from .chunking_exceptions import (
    ChunkingError,
    InvalidChunkConfigError,
)

__all__ = [
    "ConfigurationError",
    "ConfigurationFileNotFoundError",
    "ConfigurationValidationError",
    "EnvironmentVariableError",
    "ConfigurationSchemaError",
    "ChunkingError",
    "InvalidChunkConfigError",
]
