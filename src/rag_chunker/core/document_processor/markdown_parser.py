"""
Markdown Structure Parser Module - Line-oriented Structural Parsing

This module scans loosely-structured markdown line by line and groups contiguous
lines into typed structural elements (headings, paragraphs, code blocks, list
items, blockquotes, tables, horizontal rules). While scanning it tracks the
active heading hierarchy so every element is stamped with the heading context it
appeared under, e.g. ``"# Intro > ## Background"``.

It is not a full markdown parser: there is no inline parsing and no nesting.
Classification is a single left-to-right pass with a fixed priority order per
line:

1. Code fence (toggles code-block state)
2. Line inside a code block (accumulated verbatim)
3. Blank line (ends the current block)
4. Heading (standalone element, updates the heading stack)
5. Horizontal rule (standalone element)
6. List item / blockquote / table row (switches the pending block type)
7. Anything else (accumulated into the pending block)

Key Components:
- ElementType: Kinds of structural elements
- StructuralElement: Immutable classified span of source lines
- HeadingStack: Most recent heading per level, rendered as a context string
- MarkdownStructureParser: The stateful single-pass parser
- parse_markdown_structure: Convenience wrapper

Usage:
    >>> elements = parse_markdown_structure("# Title\\n\\nBody text.")
    >>> [(e.kind.value, e.heading_context) for e in elements]
    [('heading', '# Title'), ('paragraph', '# Title')]
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Tuple

from .tokenizer import estimate_tokens

logger = logging.getLogger(__name__)

MAX_HEADING_LEVELS = 6
MAX_INDENT = 3
HORIZONTAL_RULE_TOKENS = 1


class ElementType(Enum):
    """Enumeration of structural element kinds."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    CODE_BLOCK = "code_block"
    LIST_ITEM = "list_item"
    BLOCKQUOTE = "blockquote"
    TABLE = "table"
    HORIZONTAL_RULE = "horizontal_rule"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StructuralElement:
    """
    A classified, contiguous span of source lines.

    Attributes:
        kind: Element type
        heading_level: 1-6 for headings, 0 otherwise
        content: Raw text span, newline-joined
        token_estimate: Estimated tokens in content
        heading_context: Rendered heading stack at the time the element was
            produced, or None before any heading
    """
    kind: ElementType
    heading_level: int
    content: str
    token_estimate: int
    heading_context: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.kind, ElementType):
            raise ValueError(f"kind must be an ElementType, got {type(self.kind)}")
        if self.kind == ElementType.HEADING:
            if not 1 <= self.heading_level <= MAX_HEADING_LEVELS:
                raise ValueError(f"Heading level must be 1-6, got: {self.heading_level}")
        elif self.heading_level != 0:
            raise ValueError(f"Non-heading elements must have heading_level 0, got: {self.heading_level}")
        if self.token_estimate < 0:
            raise ValueError(f"token_estimate cannot be negative: {self.token_estimate}")


class HeadingStack:
    """
    Most recent heading text per level (1-6).

    Setting a level clears that level and every deeper level, since deeper
    headings go stale once a shallower or equal heading appears.

    Example:
        >>> stack = HeadingStack()
        >>> stack.set(1, "Intro")
        >>> stack.set(2, "Background")
        >>> stack.render()
        '# Intro > ## Background'
        >>> stack.set(1, "Next")
        >>> stack.render()
        '# Next'
    """

    def __init__(self) -> None:
        self._slots: List[Optional[str]] = [None] * MAX_HEADING_LEVELS

    def set(self, level: int, text: str) -> None:
        """Store heading text at level, clearing levels >= level first."""
        if not 1 <= level <= MAX_HEADING_LEVELS:
            raise ValueError(f"Heading level must be 1-6, got: {level}")
        for index in range(level - 1, MAX_HEADING_LEVELS):
            self._slots[index] = None
        self._slots[level - 1] = text

    def render(self) -> Optional[str]:
        """Render occupied levels shallowest first, or None when empty."""
        parts = [
            f"{'#' * (index + 1)} {text}"
            for index, text in enumerate(self._slots)
            if text is not None
        ]
        if not parts:
            return None
        return " > ".join(parts)

    def __repr__(self) -> str:
        return f"HeadingStack({self.render()!r})"


def is_blank_line(line: str) -> bool:
    """A line of only spaces, tabs and carriage returns (or nothing)."""
    return all(char in (' ', '\t', '\r') for char in line)


def _skip_indent(line: str) -> int:
    index = 0
    while index < len(line) and index < MAX_INDENT and line[index] == ' ':
        index += 1
    return index


def get_heading_level(line: str) -> int:
    """
    Heading level (1-6) of an ATX heading line, or 0.

    Headings must start at column 0; the '#' run must be followed by a space,
    a tab, or the end of the line.
    """
    level = 0
    while level < len(line) and level < MAX_HEADING_LEVELS and line[level] == '#':
        level += 1

    if level == 0:
        return 0
    if level < len(line) and line[level] not in (' ', '\t'):
        return 0
    return level


def heading_text(line: str, level: int) -> str:
    """Heading text with the '#' run and following spaces/tabs removed."""
    return line[level:].lstrip(' \t')


def is_code_fence(line: str) -> bool:
    """``` or ~~~ after at most three leading spaces."""
    index = _skip_indent(line)
    return line[index:index + 3] in ('```', '~~~')


def is_list_item(line: str) -> bool:
    """Bullet (-, *, +) or number followed by '.' or ')', then a space or tab."""
    stripped = line.lstrip(' \t')
    if not stripped:
        return False

    if stripped[0] in ('-', '*', '+'):
        return len(stripped) > 1 and stripped[1] in (' ', '\t')

    index = 0
    while index < len(stripped) and stripped[index].isascii() and stripped[index].isdigit():
        index += 1
    if index == 0 or index + 1 >= len(stripped):
        return False
    return stripped[index] in ('.', ')') and stripped[index + 1] in (' ', '\t')


def is_blockquote(line: str) -> bool:
    """'>' after at most three leading spaces."""
    index = _skip_indent(line)
    return index < len(line) and line[index] == '>'


def is_horizontal_rule(line: str) -> bool:
    """Three or more of one of -, * or _, optionally separated by spaces."""
    index = _skip_indent(line)
    if index >= len(line) or line[index] not in ('-', '*', '_'):
        return False

    rule_char = line[index]
    count = 0
    for char in line[index:]:
        if char == rule_char:
            count += 1
        elif char != ' ':
            return False
    return count >= 3


def is_table_row(line: str) -> bool:
    """Any line containing two or more '|' characters."""
    return line.count('|') >= 2


def iter_lines(text: str) -> Iterator[Tuple[str, bool]]:
    """
    Yield (line, had_newline) pairs, splitting on '\\n' only.

    A trailing newline does not produce an extra empty line, while trailing
    content without a final newline is still yielded.
    """
    start = 0
    length = len(text)
    while start < length:
        end = text.find('\n', start)
        if end == -1:
            yield text[start:], False
            return
        yield text[start:end], True
        start = end + 1


class MarkdownStructureParser:
    """
    Single-pass, stateful markdown structure parser.

    State per parse: a code-block flag, a HeadingStack, an accumulator buffer and
    the pending element type (Paragraph by default). The accumulator is flushed
    into an element at every state transition.

    Attributes:
        model: Embedding model name passed to the token estimator

    Example:
        >>> parser = MarkdownStructureParser()
        >>> elements = parser.parse("# A\\n\\n- one\\n- two\\n")
        >>> [e.kind.value for e in elements]
        ['heading', 'list_item']
    """

    def __init__(self, model: Optional[str] = None) -> None:
        self.model = model
        self._reset()

    def _reset(self) -> None:
        self._elements: List[StructuralElement] = []
        self._buffer: List[str] = []
        self._pending_type = ElementType.PARAGRAPH
        self._in_code_block = False
        self._headings = HeadingStack()
        self._context: Optional[str] = None

    def parse(self, text: Optional[str]) -> List[StructuralElement]:
        """
        Parse text into structural elements in source order.

        Args:
            text: Markdown text (None or "" yields no elements)

        Returns:
            List of StructuralElement objects
        """
        self._reset()
        if not text:
            return []

        for line, had_newline in iter_lines(text):
            self._process_line(line, had_newline)

        self._flush()
        elements = self._elements
        logger.debug(f"Parsed {len(elements)} markdown elements")
        self._reset()
        return elements

    def _process_line(self, line: str, had_newline: bool) -> None:
        if is_code_fence(line):
            if self._in_code_block:
                self._append_verbatim(line, had_newline)
                self._flush(ElementType.CODE_BLOCK)
                self._in_code_block = False
                self._pending_type = ElementType.PARAGRAPH
                return

            self._flush()
            self._in_code_block = True
            self._pending_type = ElementType.CODE_BLOCK

        if self._in_code_block:
            self._append_verbatim(line, had_newline)
            return

        if is_blank_line(line):
            self._flush()
            self._pending_type = ElementType.PARAGRAPH
            return

        level = get_heading_level(line)
        if level > 0:
            self._flush()
            self._headings.set(level, heading_text(line, level))
            self._context = self._headings.render()
            self._emit(ElementType.HEADING, line, level=level)
            self._pending_type = ElementType.PARAGRAPH
            return

        if is_horizontal_rule(line):
            self._flush()
            self._emit(ElementType.HORIZONTAL_RULE, line, tokens=HORIZONTAL_RULE_TOKENS)
            self._pending_type = ElementType.PARAGRAPH
            return

        if is_list_item(line):
            self._switch_type(ElementType.LIST_ITEM)
        if is_blockquote(line):
            self._switch_type(ElementType.BLOCKQUOTE)
        if is_table_row(line):
            self._switch_type(ElementType.TABLE)

        self._buffer.append(line)

    def _append_verbatim(self, line: str, had_newline: bool) -> None:
        # Code block lines keep their own newlines rather than being joined.
        self._buffer.append(line + '\n' if had_newline else line)

    def _switch_type(self, new_type: ElementType) -> None:
        if self._pending_type != new_type and self._buffer:
            self._flush()
        self._pending_type = new_type

    def _flush(self, kind: Optional[ElementType] = None) -> None:
        if not self._buffer:
            return

        kind = kind or self._pending_type
        if kind == ElementType.CODE_BLOCK:
            content = ''.join(self._buffer)
        else:
            content = '\n'.join(self._buffer)
        self._buffer = []

        if content:
            self._emit(kind, content)

    def _emit(
        self,
        kind: ElementType,
        content: str,
        level: int = 0,
        tokens: Optional[int] = None
    ) -> None:
        if tokens is None:
            tokens = estimate_tokens(content, self.model)
        self._elements.append(StructuralElement(
            kind=kind,
            heading_level=level,
            content=content,
            token_estimate=tokens,
            heading_context=self._context,
        ))


def parse_markdown_structure(text: Optional[str], model: Optional[str] = None) -> List[StructuralElement]:
    """Parse text into structural elements with a fresh parser."""
    return MarkdownStructureParser(model=model).parse(text)
