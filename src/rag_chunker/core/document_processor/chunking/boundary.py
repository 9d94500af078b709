"""
Chunk Boundary Detection Module

Contains the ChunkBoundary class for choosing where to cut text so chunks do not
start or end in the middle of a word.

The search looks at a fixed window of SEARCH_WINDOW characters either side of the
target offset and makes three passes in strict priority order, returning the
first (leftmost) hit of the highest-priority pass that finds anything:

1. Paragraph break: a blank-line boundary ("\\n\\n")
2. Sentence break: '.', '?' or '!' followed by a space or newline
3. Word break: a space or newline

If nothing qualifies the target offset itself is used. Every candidate position
holds an ASCII character, so a returned offset never lands inside a character.
"""

import logging
from enum import Enum
from typing import Tuple

logger = logging.getLogger(__name__)

SEARCH_WINDOW = 50
SENTENCE_TERMINATORS = ('.', '?', '!')
BREAK_CHARS = (' ', '\n')


class BreakType(Enum):
    """Kind of boundary a break point was found at."""
    END_OF_TEXT = "end_of_text"
    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"
    WORD = "word"
    TARGET = "target"

    def __str__(self) -> str:
        return self.value


class ChunkBoundary:
    """
    Break-point finder for chunk splitting.

    Offsets are relative to ``start`` so callers can walk a long text without
    slicing off the remainder at every step.

    Attributes:
        search_window: Characters searched either side of the target offset

    Example:
        >>> boundary = ChunkBoundary()
        >>> text = "One sentence here. Another one follows it."
        >>> boundary.find_break(text, 20, len(text))
        18
    """

    def __init__(self, search_window: int = SEARCH_WINDOW) -> None:
        if search_window < 1:
            raise ValueError(f"search_window must be positive, got: {search_window}")
        self.search_window = search_window

    def find_break(self, text: str, target_offset: int, max_offset: int, start: int = 0) -> int:
        """
        Find the best break point near target_offset.

        Args:
            text: Text being split
            target_offset: Preferred cut position, relative to start
            max_offset: Largest allowed result, relative to start
            start: Position in text that offsets are relative to

        Returns:
            Cut position relative to start, 0 <= result <= max_offset
        """
        offset, _ = self.find_break_with_type(text, target_offset, max_offset, start)
        return offset

    def find_break_with_type(
        self,
        text: str,
        target_offset: int,
        max_offset: int,
        start: int = 0
    ) -> Tuple[int, BreakType]:
        """
        Find the best break point near target_offset and report its kind.

        Returns:
            Tuple of (cut position relative to start, BreakType)
        """
        if target_offset >= max_offset:
            return max_offset, BreakType.END_OF_TEXT

        low = max(0, target_offset - self.search_window)
        high = min(target_offset + self.search_window, max_offset)

        for offset in range(max(low, 1), high):
            if text[start + offset - 1] == '\n' and text[start + offset] == '\n':
                return offset, BreakType.PARAGRAPH

        for offset in range(max(low, 1), high):
            if text[start + offset - 1] in SENTENCE_TERMINATORS and text[start + offset] in BREAK_CHARS:
                return offset, BreakType.SENTENCE

        for offset in range(low, high):
            if text[start + offset] in BREAK_CHARS:
                return offset, BreakType.WORD

        logger.debug(f"No break point within {self.search_window} of offset {target_offset}, cutting at target")
        return min(target_offset, max_offset), BreakType.TARGET

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"ChunkBoundary(search_window={self.search_window})"


_default_boundary = ChunkBoundary()


def find_break(text: str, target_offset: int, max_offset: int, start: int = 0) -> int:
    """Find a break point with the default search window."""
    return _default_boundary.find_break(text, target_offset, max_offset, start)
