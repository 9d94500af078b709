"""
Markdown Detection Module

Heuristic classifier that decides whether text is "markdown enough" to be worth
structure-aware chunking. Plain prose is routed to token-based chunking instead.

A single heading or a single code fence is a strong signal on its own. The weaker
signals (list items, blockquotes, pipe tables, inline links) only count once two
distinct indicators have been seen.

Components:
- MarkdownIndicators: Which indicators were found in a text
- detect_markdown_indicators: Scan text and report indicators
- looks_like_markdown: Boolean verdict used by the chunking dispatcher
"""

import logging
from dataclasses import dataclass, asdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)

MAX_HEADING_LEVEL = 6
MAX_INDENT = 3
REQUIRED_INDICATORS = 2


@dataclass
class MarkdownIndicators:
    """
    Markdown indicators found while scanning a text.

    Attributes:
        has_heading: ATX heading at a line start
        has_code_fence: ``` or ~~~ at a line start
        has_list: Bulleted or numbered list item at a line start
        has_blockquote: '>' at a line start
        has_table: Two '|' characters on one line
        has_link: '[text](' style link or image
        count: Number of distinct indicators found
        stopped_early: Whether the scan stopped once enough indicators were found
    """
    has_heading: bool = False
    has_code_fence: bool = False
    has_list: bool = False
    has_blockquote: bool = False
    has_table: bool = False
    has_link: bool = False
    count: int = 0
    stopped_early: bool = False

    @property
    def is_markdown(self) -> bool:
        """Verdict: one strong indicator, or enough indicators of any kind."""
        if self.has_heading or self.has_code_fence:
            return True
        return self.count >= REQUIRED_INDICATORS

    def to_dict(self) -> Dict[str, object]:
        """Convert indicators to a dictionary including the verdict."""
        data = asdict(self)
        data["is_markdown"] = self.is_markdown
        return data


def _is_heading_marker(text: str, pos: int) -> bool:
    level = 0
    while level < MAX_HEADING_LEVEL and pos + level < len(text) and text[pos + level] == '#':
        level += 1
    if level == 0:
        return False
    after = pos + level
    return after >= len(text) or text[after] in (' ', '\t', '\n')


def _is_fence_marker(text: str, pos: int) -> bool:
    if pos + 2 >= len(text):
        return False
    return text[pos] in ('`', '~') and text[pos] == text[pos + 1] == text[pos + 2]


def _is_list_marker(text: str, pos: int) -> bool:
    length = len(text)
    if text[pos] in ('-', '*', '+'):
        return pos + 1 < length and text[pos + 1] in (' ', '\t')

    end = pos
    while end < length and text[end].isdigit() and text[end].isascii():
        end += 1
    if end == pos or end >= length:
        return False
    return text[end] in ('.', ')') and end + 1 < length and text[end + 1] in (' ', '\t')


def _closes_link(text: str, pos: int) -> bool:
    """Check for a balanced '[...]' starting at pos followed directly by '('."""
    depth = 1
    cursor = pos + 1
    length = len(text)
    while cursor < length and depth > 0:
        if text[cursor] == '[':
            depth += 1
        elif text[cursor] == ']':
            depth -= 1
        cursor += 1
    return depth == 0 and cursor < length and text[cursor] == '('


def detect_markdown_indicators(text: Optional[str]) -> MarkdownIndicators:
    """
    Scan text for markdown indicators.

    Line-start indicators (heading, code fence, list item, blockquote) tolerate up
    to three leading spaces. Table and link indicators are detected anywhere on a
    line. The scan stops as soon as two distinct indicators have been found.

    Args:
        text: Text to scan

    Returns:
        MarkdownIndicators describing what was found
    """
    indicators = MarkdownIndicators()
    if not text:
        return indicators

    length = len(text)
    pos = 0
    at_line_start = True

    while pos < length:
        if at_line_start:
            probe = pos
            while probe < length and probe - pos < MAX_INDENT and text[probe] == ' ':
                probe += 1

            if probe < length:
                char = text[probe]

                if char == '#' and not indicators.has_heading and _is_heading_marker(text, probe):
                    indicators.has_heading = True
                    indicators.count += 1

                if char in ('`', '~') and not indicators.has_code_fence and _is_fence_marker(text, probe):
                    indicators.has_code_fence = True
                    indicators.count += 1

                if not indicators.has_list and _is_list_marker(text, probe):
                    indicators.has_list = True
                    indicators.count += 1

                if char == '>' and not indicators.has_blockquote:
                    indicators.has_blockquote = True
                    indicators.count += 1

        char = text[pos]

        if char == '|' and not indicators.has_table:
            line_end = text.find('\n', pos + 1)
            if line_end == -1:
                line_end = length
            if text.find('|', pos + 1, line_end) != -1:
                indicators.has_table = True
                indicators.count += 1

        if char == '[' and not indicators.has_link and _closes_link(text, pos):
            indicators.has_link = True
            indicators.count += 1

        at_line_start = char == '\n'
        pos += 1

        if indicators.count >= REQUIRED_INDICATORS:
            indicators.stopped_early = True
            break

    return indicators


def looks_like_markdown(text: Optional[str]) -> bool:
    """
    Decide whether text warrants structure-aware chunking.

    Args:
        text: Text to classify

    Returns:
        True for a heading or code fence alone, or two weaker indicators together;
        False for empty input
    """
    indicators = detect_markdown_indicators(text)
    verdict = indicators.is_markdown
    logger.debug(
        f"Markdown detection: indicators={indicators.count}, "
        f"heading={indicators.has_heading}, code_fence={indicators.has_code_fence}, "
        f"verdict={verdict}"
    )
    return verdict
