"""
RAG Chunker CLI Package.

This package contains the command-line interface for chunking documents and
inspecting how they are detected and parsed.
"""

from .cli import app, cli_main

__all__ = ["app", "cli_main"]
