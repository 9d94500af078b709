"""
Chunk Refiner Module

Two passes that bring element-derived chunks into the configured size band:

1. split_oversized: cut any chunk above max_tokens at break points, every
   fragment inheriting the original heading context
2. merge_undersized: fold small chunks into their predecessor when both share a
   heading context and the result stays within max_tokens

Both passes return new lists and leave ordering untouched.
"""

import logging
from typing import List, Optional, Tuple

from .boundary import ChunkBoundary
from .chunker import SKIPPABLE_WHITESPACE, skip_whitespace
from .result import HybridChunk
from ..tokenizer import char_offset_for_token_budget

logger = logging.getLogger(__name__)

INLINE_SPLIT_WHITESPACE = (' ', '\t', '\n')


def split_content(
    content: str,
    max_tokens: int,
    model: Optional[str] = None,
    skip_chars: Tuple[str, ...] = SKIPPABLE_WHITESPACE,
    boundary_detector: Optional[ChunkBoundary] = None
) -> List[str]:
    """
    Split content into fragments of at most roughly max_tokens each.

    Every iteration advances by at least one character, and whitespace between
    fragments (any of skip_chars) is consumed rather than emitted.

    Args:
        content: Text to split
        max_tokens: Token budget per fragment
        model: Embedding model name passed to the estimator
        skip_chars: Characters skipped between fragments
        boundary_detector: Break-point finder, default window when omitted

    Returns:
        Non-empty fragments in source order
    """
    boundary = boundary_detector or ChunkBoundary()
    fragments: List[str] = []
    length = len(content)
    position = 0

    while position < length:
        remaining = length - position
        target_offset = char_offset_for_token_budget(content, max_tokens, model, start=position)
        end_offset = boundary.find_break(content, target_offset, remaining, start=position)
        if end_offset <= 0:
            end_offset = target_offset if target_offset > 0 else remaining

        fragment = content[position:position + end_offset]
        if fragment.strip():
            fragments.append(fragment)
        position = skip_whitespace(content, position + end_offset, skip_chars)

    return fragments


def split_oversized(
    chunks: List[HybridChunk],
    max_tokens: int,
    model: Optional[str] = None
) -> List[HybridChunk]:
    """
    Split every chunk whose token estimate exceeds max_tokens.

    Chunks within budget pass through unchanged.

    Args:
        chunks: Input chunks
        max_tokens: Token budget per chunk
        model: Embedding model name passed to the estimator

    Returns:
        New list of chunks
    """
    result: List[HybridChunk] = []
    boundary = ChunkBoundary()

    for chunk in chunks:
        if chunk.token_estimate <= max_tokens:
            result.append(chunk)
            continue

        for fragment in split_content(chunk.content, max_tokens, model, boundary_detector=boundary):
            result.append(HybridChunk.create(fragment, chunk.heading_context, model))

    logger.debug(f"Split pass: {len(chunks)} chunks in, {len(result)} chunks out")
    return result


def merge_undersized(
    chunks: List[HybridChunk],
    min_tokens: int,
    max_tokens: int,
    model: Optional[str] = None
) -> List[HybridChunk]:
    """
    Merge small chunks forward into a single pending chunk.

    A chunk below min_tokens is held as pending. The next chunk is absorbed into
    it when both have the same heading context and their combined estimate is at
    most max_tokens; otherwise the pending chunk is emitted as it is and the next
    chunk is considered afresh. There is no lookback, so a chunk may stay below
    min_tokens.

    Args:
        chunks: Input chunks
        min_tokens: Threshold below which a chunk waits for a merge partner
        max_tokens: Upper bound on a merged chunk's token estimate
        model: Embedding model name passed to the estimator

    Returns:
        New list of chunks
    """
    result: List[HybridChunk] = []
    pending: Optional[HybridChunk] = None

    for chunk in chunks:
        if pending is not None:
            if (pending.has_same_context(chunk)
                    and pending.token_estimate + chunk.token_estimate <= max_tokens):
                pending.absorb(chunk, model)
                continue
            result.append(pending)
            pending = None

        if chunk.token_estimate >= min_tokens:
            result.append(chunk)
        else:
            # Copy so absorbing never mutates the caller's chunk.
            pending = HybridChunk(
                content=chunk.content,
                token_estimate=chunk.token_estimate,
                heading_context=chunk.heading_context,
            )

    if pending is not None:
        result.append(pending)

    logger.debug(f"Merge pass: {len(chunks)} chunks in, {len(result)} chunks out")
    return result

