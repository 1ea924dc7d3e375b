"""Formatter facade for chat_markup - raw message text in, Document out."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chat_markup.block_segmenter import segment_blocks
from chat_markup.constants import CODE_FENCE, QUOTE_PREFIX
from chat_markup.types import (
    Block,
    Blockquote,
    Bold,
    BoldItalic,
    CodeBlock,
    Config,
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
    Underline,
    UnderlineItalic,
)

logger = logging.getLogger(__name__)


def format_message(text: str, config: Config | None = None) -> Document:
    """Format a raw message into a Document.

    Total: any string yields a Document, and unclosed constructs degrade to
    literal text. Input over the platform length ceiling is still formatted.
    """
    config = config or Config()
    if len(text) > config.max_message_length:
        logger.debug(
            "Formatting message of %d characters (ceiling %d)",
            len(text),
            config.max_message_length,
        )
    return Document(tuple(segment_blocks(text, config.max_inline_depth)))


# ---------------------------------------------------------------------------
# Inverse helpers
# ---------------------------------------------------------------------------


def to_markup(document: Document) -> str:
    """Rebuild the source text of *document*, delimiters included.

    ``to_markup(format_message(s)) == s`` holds for every string ``s``.
    """
    parts: list[str] = []
    previous: Block | None = None
    for block in document.blocks:
        if previous is not None and not isinstance(previous, CodeBlock) and not isinstance(
            block, CodeBlock
        ):
            parts.append("\n")
        parts.append(_block_markup(block))
        previous = block
    return "".join(parts)


def plain_text(document: Document) -> str:
    """Concatenate the literal text of *document* without markup delimiters."""
    lines: list[str] = []
    for block in document.blocks:
        if isinstance(block, CodeBlock):
            lines.append(block.body)
        elif isinstance(block, Blockquote):
            lines.extend(_inline_plain(line) for line in block.lines)
        else:
            lines.append(_inline_plain(block.children))
    return "\n".join(lines)


def _block_markup(block: Block) -> str:
    match block:
        case Paragraph(children=children):
            return inline_markup(children)
        case Heading(level=level, children=children, separator=separator):
            return "#" * level + separator + inline_markup(children)
        case Blockquote(lines=lines):
            return "\n".join(QUOTE_PREFIX + inline_markup(line) for line in lines)
        case CodeBlock(language=language, body=body, opening_newline=opening_newline):
            newline = "\n" if opening_newline else ""
            return f"{CODE_FENCE}{language or ''}{newline}{body}{CODE_FENCE}"
    raise TypeError(f"Unknown block: {block!r}")


def inline_markup(nodes: Iterable[InlineNode]) -> str:
    """Rebuild the source text of a sequence of inline nodes."""
    return "".join(_node_markup(node) for node in nodes)


def _node_markup(node: InlineNode) -> str:
    match node:
        case Text(literal=literal):
            return literal
        case LineBreak():
            return "\n"
        case BoldItalic(children=children):
            return f"***{inline_markup(children)}***"
        case Bold(children=children):
            return f"**{inline_markup(children)}**"
        case UnderlineItalic(children=children):
            return f"__*{inline_markup(children)}*__"
        case Underline(children=children):
            return f"__{inline_markup(children)}__"
        case Italic(children=children, delimiter=delimiter):
            return f"{delimiter}{inline_markup(children)}{delimiter}"
        case Strikethrough(literal=literal):
            return f"~~{literal}~~"
        case Spoiler(literal=literal):
            return f"||{literal}||"
        case InlineCode(literal=literal):
            return f"`{literal}`"
        case Mention(token=token):
            return f"@{token}"
    raise TypeError(f"Unknown inline node: {node!r}")


def _inline_plain(nodes: Iterable[InlineNode]) -> str:
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(literal=literal) | Strikethrough(literal=literal) | Spoiler(
                literal=literal
            ) | InlineCode(literal=literal):
                parts.append(literal)
            case LineBreak():
                parts.append("\n")
            case Mention(token=token):
                parts.append(f"@{token}")
            case Bold(children=children) | Italic(children=children) | BoldItalic(
                children=children
            ) | Underline(children=children) | UnderlineItalic(children=children):
                parts.append(_inline_plain(children))
    return "".join(parts)
