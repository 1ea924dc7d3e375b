"""Inline parser for chat_markup - turns one line into styled inline nodes.

The scanner tries a fixed, ordered list of constructs at every cursor
position and takes the first that closes on the same line:

    `code`  ***bold italic***  **bold**  __*underline italic*__
    __underline__  *italic* / _italic_  ~~strike~~  ||spoiler||  @mention

Anything that does not close is absorbed into the surrounding literal text.
Closing delimiters are located with ``str.find``; a failed search is
remembered per delimiter so later attempts past that point fail in O(1),
which keeps each scan linear in the line length. Recursion into styled
bodies stops at ``max_depth``, after which bodies are kept as literal text.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from chat_markup.constants import INLINE_MARKERS, MAX_INLINE_DEPTH
from chat_markup.types import (
    Bold,
    BoldItalic,
    InlineCode,
    InlineNode,
    Italic,
    Mention,
    Spoiler,
    Strikethrough,
    Text,
    Underline,
    UnderlineItalic,
)

logger = logging.getLogger(__name__)

type _Match = tuple[InlineNode, int] | None


def parse_inline(line: str, max_depth: int = MAX_INLINE_DEPTH) -> tuple[InlineNode, ...]:
    """Parse a single line (no embedded newline) into inline nodes.

    Never raises. Adjacent literal runs are merged, so a line without any
    markup yields exactly one ``Text`` node (or none for an empty line).
    """
    return _InlineScanner(line, depth=0, max_depth=max_depth).scan()


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


class _InlineScanner:
    """Single-pass scanner over one line at one nesting depth."""

    def __init__(self, line: str, depth: int, max_depth: int) -> None:
        self._line = line
        self._depth = depth
        self._max_depth = max_depth
        # delimiter -> smallest start offset known to have no occurrence at or after it
        self._exhausted: dict[str, int] = {}
        self._nodes: list[InlineNode] = []
        self._pending_text: list[str] = []
        self._matchers: tuple[Callable[[int], _Match], ...] = (
            self._match_code,
            self._match_bold_italic,
            self._match_bold,
            self._match_underline_italic,
            self._match_underline,
            self._match_italic,
            self._match_strikethrough,
            self._match_spoiler,
            self._match_mention,
        )

    def scan(self) -> tuple[InlineNode, ...]:
        line = self._line
        length = len(line)
        pos = 0

        while pos < length:
            match = self._try_matchers(pos)
            if match is not None:
                node, pos = match
                self._flush_text()
                self._nodes.append(node)
                continue

            # No construct here: absorb this character and everything up to
            # the next character that could open one.
            end = pos + 1
            while end < length and line[end] not in INLINE_MARKERS:
                end += 1
            self._pending_text.append(line[pos:end])
            pos = end

        self._flush_text()
        return tuple(self._nodes)

    def _try_matchers(self, pos: int) -> _Match:
        if self._line[pos] not in INLINE_MARKERS:
            return None
        for matcher in self._matchers:
            match = matcher(pos)
            if match is not None:
                return match
        return None

    def _flush_text(self) -> None:
        if self._pending_text:
            self._nodes.append(Text("".join(self._pending_text)))
            self._pending_text = []

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find(self, delimiter: str, start: int) -> int:
        """Find *delimiter* at or after *start*, caching misses."""
        limit = self._exhausted.get(delimiter)
        if limit is not None and start >= limit:
            return -1
        index = self._line.find(delimiter, start)
        if index == -1:
            self._exhausted[delimiter] = start
        return index

    def _parse_body(self, body: str) -> tuple[InlineNode, ...]:
        depth = self._depth + 1
        if depth > self._max_depth:
            logger.debug("Inline nesting cap %d reached; keeping body literal", self._max_depth)
            return (Text(body),)
        return _InlineScanner(body, depth=depth, max_depth=self._max_depth).scan()

    def _delimited(self, pos: int, opener: str, closer: str) -> tuple[str, int] | None:
        """Match ``opener body closer`` with a non-empty, shortest body."""
        if not self._line.startswith(opener, pos):
            return None
        body_start = pos + len(opener)
        close = self._find(closer, body_start + 1)
        if close == -1:
            return None
        return self._line[body_start:close], close + len(closer)

    # ------------------------------------------------------------------
    # Matchers, in priority order
    # ------------------------------------------------------------------

    def _match_code(self, pos: int) -> _Match:
        if self._line[pos] != "`":
            return None
        close = self._find("`", pos + 1)
        if close <= pos + 1:
            return None
        return InlineCode(self._line[pos + 1 : close]), close + 1

    def _match_bold_italic(self, pos: int) -> _Match:
        found = self._delimited(pos, "***", "***")
        if found is None:
            return None
        body, end = found
        return BoldItalic(self._parse_body(body)), end

    def _match_bold(self, pos: int) -> _Match:
        found = self._delimited(pos, "**", "**")
        if found is None:
            return None
        body, end = found
        return Bold(self._parse_body(body)), end

    def _match_underline_italic(self, pos: int) -> _Match:
        found = self._delimited(pos, "__*", "*__")
        if found is None:
            return None
        body, end = found
        return UnderlineItalic(self._parse_body(body)), end

    def _match_underline(self, pos: int) -> _Match:
        found = self._delimited(pos, "__", "__")
        if found is None:
            return None
        body, end = found
        return Underline(self._parse_body(body)), end

    def _match_italic(self, pos: int) -> _Match:
        delimiter = self._line[pos]
        if delimiter not in ("*", "_"):
            return None
        # The body may not contain the delimiter, so the first one closes it.
        close = self._find(delimiter, pos + 1)
        if close <= pos + 1:
            return None
        return Italic(self._parse_body(self._line[pos + 1 : close]), delimiter), close + 1

    def _match_strikethrough(self, pos: int) -> _Match:
        found = self._delimited(pos, "~~", "~~")
        if found is None:
            return None
        body, end = found
        return Strikethrough(body), end

    def _match_spoiler(self, pos: int) -> _Match:
        found = self._delimited(pos, "||", "||")
        if found is None:
            return None
        body, end = found
        return Spoiler(body), end

    def _match_mention(self, pos: int) -> _Match:
        line = self._line
        if line[pos] != "@":
            return None
        end = pos + 1
        while end < len(line) and _is_word_char(line[end]):
            end += 1
        if end == pos + 1:
            return None
        return Mention(line[pos + 1 : end]), end
