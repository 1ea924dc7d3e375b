"""Rich-based rendering of formatted messages for the terminal."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text as RichText

from chat_markup.types import (
    Block,
    Blockquote,
    Bold,
    BoldItalic,
    CodeBlock,
    Document,
    Heading,
    InlineCode,
    InlineNode,
    Italic,
    LineBreak,
    Mention,
    Paragraph,
    Spoiler,
    Strikethrough,
    Text,
    Theme,
    Underline,
    UnderlineItalic,
)

# Block index followed by the child index path down to the spoiler node.
type SpoilerKey = tuple[int, ...]

_CONTAINER_STYLES: dict[type, str] = {
    Bold: "bold",
    Italic: "italic",
    BoldItalic: "bold italic",
    Underline: "underline",
    UnderlineItalic: "underline italic",
}

_QUOTE_GUTTER = "┃ "


def spoiler_keys(document: Document) -> list[SpoilerKey]:
    """Return the keys of all spoilers in *document*, in source order."""
    return [key for key, _ in _iter_spoilers(document)]


def _iter_spoilers(document: Document) -> Iterator[tuple[SpoilerKey, Spoiler]]:
    for block_index, block in enumerate(document.blocks):
        for path, nodes in _block_inline_runs(block_index, block):
            yield from _walk_spoilers(path, nodes)


def _block_inline_runs(
    block_index: int, block: Block
) -> Iterator[tuple[SpoilerKey, tuple[InlineNode, ...]]]:
    if isinstance(block, Blockquote):
        for line_index, line in enumerate(block.lines):
            yield (block_index, line_index), line
    elif isinstance(block, (Paragraph, Heading)):
        yield (block_index,), block.children


def _walk_spoilers(
    path: SpoilerKey, nodes: tuple[InlineNode, ...]
) -> Iterator[tuple[SpoilerKey, Spoiler]]:
    for index, node in enumerate(nodes):
        if isinstance(node, Spoiler):
            yield (*path, index), node
        elif isinstance(node, tuple(_CONTAINER_STYLES)):
            yield from _walk_spoilers((*path, index), node.children)


class MessageRenderer:
    """Maps a Document onto rich renderables.

    The renderer owns all presentation state: spoiler reveal toggles are
    kept here, keyed by node position, and never written into the tree.
    Mentions other than ``@everyone``/``@here`` are highlighted only when
    *mention_resolver* recognises the token (or when no resolver is given).
    """

    def __init__(
        self,
        theme: Theme | None = None,
        mention_resolver: Callable[[str], bool] | None = None,
    ) -> None:
        self._theme = theme or Theme()
        self._mention_resolver = mention_resolver
        self._revealed: set[SpoilerKey] = set()

    def toggle_spoiler(self, key: SpoilerKey) -> bool:
        """Flip the reveal state of one spoiler. Returns the new state."""
        if key in self._revealed:
            self._revealed.discard(key)
            return False
        self._revealed.add(key)
        return True

    def is_revealed(self, key: SpoilerKey) -> bool:
        return key in self._revealed

    def reset(self) -> None:
        """Hide every spoiler again."""
        self._revealed.clear()

    def render(self, document: Document) -> Group:
        return Group(
            *(self.render_block(index, block) for index, block in enumerate(document.blocks))
        )

    def render_block(self, index: int, block: Block) -> RenderableType:
        theme = self._theme
        match block:
            case Paragraph(children=children):
                return self.render_inline(children, (index,))
            case Heading(level=level, children=children):
                text = self.render_inline(children, (index,))
                text.stylize(theme.heading_styles[level - 1])
                return text
            case Blockquote(lines=lines):
                quoted = RichText(style=theme.quote_text_style)
                for line_index, line in enumerate(lines):
                    if line_index:
                        quoted.append("\n")
                    quoted.append(_QUOTE_GUTTER, style=theme.quote_gutter_color)
                    quoted.append_text(self.render_inline(line, (index, line_index)))
                return quoted
            case CodeBlock(language=language, body=body):
                syntax = Syntax(
                    body.rstrip("\n"),
                    language or "text",
                    theme=theme.code_block_theme,
                    word_wrap=True,
                )
                return Panel(syntax, title=language, title_align="left", expand=False)
        raise TypeError(f"Unknown block: {block!r}")

    def render_inline(self, nodes: tuple[InlineNode, ...], path: SpoilerKey) -> RichText:
        text = RichText()
        for index, node in enumerate(nodes):
            self._append_node(text, node, (*path, index))
        return text

    def _append_node(self, text: RichText, node: InlineNode, key: SpoilerKey) -> None:
        theme = self._theme
        match node:
            case Text(literal=literal):
                text.append(literal)
            case LineBreak():
                text.append("\n")
            case Bold() | Italic() | BoldItalic() | Underline() | UnderlineItalic():
                inner = self.render_inline(node.children, key)
                inner.stylize(_CONTAINER_STYLES[type(node)])
                text.append_text(inner)
            case Strikethrough(literal=literal):
                text.append(literal, style=theme.strike_style)
            case InlineCode(literal=literal):
                text.append(literal, style=theme.code_style)
            case Spoiler(literal=literal):
                if key in self._revealed:
                    text.append(literal, style=theme.spoiler_revealed_style)
                else:
                    text.append(literal, style=theme.spoiler_hidden_style)
            case Mention(token=token):
                if node.is_special:
                    text.append(f"@{token}", style=theme.special_mention_style)
                elif self._mention_resolver is None or self._mention_resolver(token):
                    text.append(f"@{token}", style=theme.mention_style)
                else:
                    text.append(f"@{token}")
