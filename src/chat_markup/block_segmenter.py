"""Block segmentation for chat_markup - splits a message into block units."""

from __future__ import annotations

from collections.abc import Iterator

from chat_markup.constants import (
    CODE_FENCE,
    MAX_HEADING_LEVEL,
    MAX_INLINE_DEPTH,
    QUOTE_PREFIX,
)
from chat_markup.inline_parser import parse_inline
from chat_markup.types import (
    Block,
    Blockquote,
    CodeBlock,
    Heading,
    InlineNode,
    LineBreak,
    Paragraph,
)


def segment_blocks(text: str, max_depth: int = MAX_INLINE_DEPTH) -> list[Block]:
    """Split *text* into ordered blocks.

    Fenced code blocks are cut out first, left to right; the text between
    them is processed line by line into paragraphs, headings and block
    quotes. An opening fence without a closing fence stays literal text.
    """
    blocks: list[Block] = []
    for segment in split_fences(text):
        if isinstance(segment, CodeBlock):
            blocks.append(segment)
        elif segment:
            blocks.extend(_LineSegmenter(max_depth).run(segment))
    return blocks


def split_fences(text: str) -> Iterator[str | CodeBlock]:
    """Yield text segments and ``CodeBlock`` instances in source order.

    Empty text segments between adjacent fences are yielded as ``""``.
    """
    pos = 0
    while True:
        open_at = text.find(CODE_FENCE, pos)
        if open_at == -1:
            break

        lang_end = open_at + len(CODE_FENCE)
        while lang_end < len(text) and (text[lang_end].isalnum() or text[lang_end] == "_"):
            lang_end += 1
        language = text[open_at + len(CODE_FENCE) : lang_end]

        opening_newline = text.startswith("\n", lang_end)
        body_start = lang_end + 1 if opening_newline else lang_end

        close_at = text.find(CODE_FENCE, body_start)
        if close_at == -1:
            # Nothing after this point can close a fence either.
            break

        yield text[pos:open_at]
        yield CodeBlock(
            language=language or None,
            body=text[body_start:close_at],
            opening_newline=opening_newline,
        )
        pos = close_at + len(CODE_FENCE)

    yield text[pos:]


def _heading_level(line: str) -> int:
    """Return the heading level for ``#{1,3} rest`` lines, else 0."""
    level = 0
    while level < len(line) and line[level] == "#":
        level += 1
    if not 1 <= level <= MAX_HEADING_LEVEL:
        return 0
    if len(line) <= level + 1 or not line[level].isspace():
        return 0
    return level


class _LineSegmenter:
    """Accumulates lines of a fence-free segment into blocks."""

    def __init__(self, max_depth: int) -> None:
        self._max_depth = max_depth
        self._blocks: list[Block] = []
        self._quote_lines: list[tuple[InlineNode, ...]] = []
        self._paragraph_lines: list[str] | None = None

    def run(self, segment: str) -> list[Block]:
        for line in segment.split("\n"):
            if line.startswith(QUOTE_PREFIX):
                self._flush_paragraph()
                self._quote_lines.append(self._inline(line[len(QUOTE_PREFIX) :]))
                continue
            self._flush_quote()

            level = _heading_level(line)
            if level:
                self._flush_paragraph()
                self._blocks.append(
                    Heading(level, self._inline(line[level + 1 :]), line[level])
                )
                continue

            if self._paragraph_lines is None:
                self._paragraph_lines = []
            self._paragraph_lines.append(line)

        self._flush_quote()
        self._flush_paragraph()
        return self._blocks

    def _inline(self, line: str) -> tuple[InlineNode, ...]:
        return parse_inline(line, self._max_depth)

    def _flush_quote(self) -> None:
        if self._quote_lines:
            self._blocks.append(Blockquote(tuple(self._quote_lines)))
            self._quote_lines = []

    def _flush_paragraph(self) -> None:
        if self._paragraph_lines is None:
            return
        children: list[InlineNode] = []
        for index, line in enumerate(self._paragraph_lines):
            if index:
                children.append(LineBreak())
            children.extend(self._inline(line))
        self._blocks.append(Paragraph(tuple(children)))
        self._paragraph_lines = None
