"""
Token Estimation Module

Approximates embedding-model token counts from character counts.

The estimate is deliberately crude: roughly four characters per token, which is
close enough for English prose to drive chunk sizing without shipping a
byte-pair-encoding vocabulary. Counts are taken over Unicode code points, so an
offset returned from this module is always a valid ``str`` index and slicing at it
can never split a multi-byte character.

Components:
- CHARS_PER_TOKEN: Characters assumed per token
- estimate_tokens: Approximate token count for a text
- char_offset_for_token_budget: Character offset at which a token budget runs out
"""

import logging
from typing import Optional

logger = logging.getLogger(__name__)

CHARS_PER_TOKEN = 4


def estimate_tokens(text: Optional[str], model: Optional[str] = None) -> int:
    """
    Estimate the number of tokens in text.

    Counts code points and divides by CHARS_PER_TOKEN, rounding up.

    Args:
        text: Text to measure (None and "" yield 0)
        model: Embedding model name; recorded for diagnostics only

    Returns:
        Non-negative token estimate

    Example:
        >>> estimate_tokens("Hello world")
        3
    """
    if not text:
        return 0

    char_count = len(text)
    token_estimate = (char_count + CHARS_PER_TOKEN - 1) // CHARS_PER_TOKEN

    logger.debug(
        f"Token count estimate: {token_estimate} (from {char_count} characters, model={model})"
    )
    return token_estimate


def char_offset_for_token_budget(
    text: Optional[str],
    target_tokens: int,
    model: Optional[str] = None,
    start: int = 0
) -> int:
    """
    Find the character offset where a token budget is used up.

    Args:
        text: Text to walk
        target_tokens: Token budget
        model: Embedding model name; recorded for diagnostics only
        start: Position in text where the budget starts being spent

    Returns:
        Offset relative to start, clamped to the remaining length; 0 for empty
        text or a non-positive budget
    """
    if not text or target_tokens <= 0:
        return 0

    remaining = max(0, len(text) - start)
    return min(target_tokens * CHARS_PER_TOKEN, remaining)
