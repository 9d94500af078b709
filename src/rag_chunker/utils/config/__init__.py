"""Configuration management package.

This package provides a layered configuration system with support for:
- Packaged defaults
- An optional JSON configuration file
- Environment variable overrides (with .env loading)
- JSON schema validation

Usage:
    from rag_chunker.utils.config import ConfigManager

    config = ConfigManager()
    chunk_config = config.chunk_config(strategy="hybrid")
"""

from .manager import ConfigManager, deep_merge_dicts
from .paths import ConfigPaths
from .file_operations import FileOperations
from .schema_validation import SchemaValidator
from .environment import EnvironmentHandler

__all__ = [
    'ConfigManager',
    'ConfigPaths',
    'FileOperations',
    'SchemaValidator',
    'EnvironmentHandler',
    'deep_merge_dicts',
]
