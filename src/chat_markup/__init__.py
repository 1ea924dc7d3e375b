"""chat_markup - chat message formatting and ``@`` mention completion."""

from chat_markup.composer import ComposerState, MentionComposer
from chat_markup.config_loader import LoadedConfig, load_config
from chat_markup.formatter import format_message, plain_text, to_markup
from chat_markup.ranker import rank_suggestions
from chat_markup.trigger import detect_trigger
from chat_markup.types import (
    ActiveTrigger,
    Config,
    Document,
    Identity,
    NoTrigger,
    RosterEntry,
    SpecialKeyword,
    Theme,
)

__all__ = [
    "ActiveTrigger",
    "ComposerState",
    "Config",
    "Document",
    "Identity",
    "LoadedConfig",
    "MentionComposer",
    "NoTrigger",
    "RosterEntry",
    "SpecialKeyword",
    "Theme",
    "detect_trigger",
    "format_message",
    "load_config",
    "plain_text",
    "rank_suggestions",
    "to_markup",
]
