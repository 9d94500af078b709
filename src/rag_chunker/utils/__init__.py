"""
Utilities package for the RAG chunker.

This package contains the configuration layer and logging setup used by the
command line interface and by host applications.
"""

from .config import ConfigManager, ConfigPaths
from .logging_config import LogFormat, LogLevel, setup_logging

__all__ = [
    "ConfigManager",
    "ConfigPaths",
    "LogFormat",
    "LogLevel",
    "setup_logging",
]
