"""Core data types for chat_markup: the formatted node tree, trigger state, suggestions."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from chat_markup.constants import (
    MAX_INLINE_DEPTH,
    MAX_MESSAGE_LENGTH,
    MAX_SUGGESTIONS,
    SPECIAL_KEYWORDS,
)

# --- Inline nodes ---


@dataclass(frozen=True)
class Text:
    literal: str


@dataclass(frozen=True)
class LineBreak:
    """Soft break between two lines of the same paragraph."""


@dataclass(frozen=True)
class Bold:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True)
class Italic:
    children: tuple[InlineNode, ...]
    delimiter: str = "*"


@dataclass(frozen=True)
class BoldItalic:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True)
class Underline:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True)
class UnderlineItalic:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True)
class Strikethrough:
    literal: str


@dataclass(frozen=True)
class Spoiler:
    literal: str


@dataclass(frozen=True)
class InlineCode:
    literal: str


@dataclass(frozen=True)
class Mention:
    token: str

    @property
    def is_special(self) -> bool:
        return self.token in SPECIAL_KEYWORDS


type InlineNode = (
    Text
    | LineBreak
    | Bold
    | Italic
    | BoldItalic
    | Underline
    | UnderlineItalic
    | Strikethrough
    | Spoiler
    | InlineCode
    | Mention
)


# --- Blocks ---


@dataclass(frozen=True)
class Paragraph:
    children: tuple[InlineNode, ...]


@dataclass(frozen=True)
class Heading:
    level: int
    children: tuple[InlineNode, ...]
    # Whitespace character between the hashes and the content.
    separator: str = " "


@dataclass(frozen=True)
class Blockquote:
    lines: tuple[tuple[InlineNode, ...], ...]


@dataclass(frozen=True)
class CodeBlock:
    language: str | None
    body: str
    # Whether the opening fence line was terminated by a newline.
    opening_newline: bool = True


type Block = Paragraph | Heading | Blockquote | CodeBlock


@dataclass(frozen=True)
class Document:
    blocks: tuple[Block, ...] = ()

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)


# --- Mention triggers ---


@dataclass(frozen=True)
class NoTrigger:
    pass


@dataclass(frozen=True)
class ActiveTrigger:
    anchor: int  # index of the '@'
    query: str


type TriggerState = NoTrigger | ActiveTrigger

NO_TRIGGER = NoTrigger()


# --- Suggestions ---


@dataclass(frozen=True)
class RosterEntry:
    id: str
    display_name: str
    handle: str
    avatar_ref: str | None = None


@dataclass(frozen=True)
class SpecialKeyword:
    keyword: str

    @property
    def handle(self) -> str:
        return self.keyword


@dataclass(frozen=True)
class Identity:
    id: str
    display_name: str
    handle: str
    avatar_ref: str | None = None

    @classmethod
    def from_roster(cls, entry: RosterEntry) -> Identity:
        return cls(
            id=entry.id,
            display_name=entry.display_name,
            handle=entry.handle,
            avatar_ref=entry.avatar_ref,
        )


type Suggestion = SpecialKeyword | Identity


# --- Configuration ---


@dataclass
class Theme:
    heading_styles: tuple[str, str, str] = ("bold underline", "bold", "bold dim")
    quote_gutter_color: str = "grey50"
    quote_text_style: str = "grey70"
    code_style: str = "dark_orange on grey15"
    code_block_theme: str = "monokai"
    strike_style: str = "strike grey50"
    spoiler_hidden_style: str = "grey35 on grey35"
    spoiler_revealed_style: str = "grey85 on grey23"
    mention_style: str = "bold bright_blue on grey19"
    special_mention_style: str = "bold yellow on grey19"


@dataclass
class Config:
    max_inline_depth: int = MAX_INLINE_DEPTH
    max_message_length: int = MAX_MESSAGE_LENGTH
    suggestion_limit: int = MAX_SUGGESTIONS
    theme: Theme = field(default_factory=Theme)
