"""Shared test fixtures and configuration for RAG chunker tests."""

import shutil
import tempfile
from pathlib import Path

import pytest

from rag_chunker.utils.config.environment import EnvironmentHandler


@pytest.fixture(autouse=True)
def clean_chunker_environment(monkeypatch):
    """Keep RAG_CHUNKER_* variables from the outer shell out of every test."""
    for variable in EnvironmentHandler.ENV_MAPPING:
        monkeypatch.delenv(variable, raising=False)
    yield


@pytest.fixture
def temp_directory():
    """Provide a temporary directory for testing."""
    temp_dir = tempfile.mkdtemp()
    temp_path = Path(temp_dir)

    yield temp_path

    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def sample_markdown():
    """Markdown document with nested headings, a list and a code block."""
    return """# Guide

Welcome to the guide.

## Install

Run the installer:

```bash
pip install rag-chunker
```

## Usage

- chunk a file
- inspect its structure
"""


@pytest.fixture
def sample_plain_text():
    """Plain prose with no markdown indicators."""
    return (
        "The quick brown fox jumps over the lazy dog. "
        "It was a bright cold day in April, and the clocks were striking thirteen. "
        "Call me Ishmael. Some years ago, never mind how long precisely, "
        "having little or no money in my purse, I thought I would sail about a little."
    )


@pytest.fixture
def numbered_words():
    """200 numbered words, 999 characters, 250 estimated tokens."""
    return " ".join(f"w{i:03d}" for i in range(200))
