"""Mention completer for prompt_toolkit - ``@`` type-ahead dropdown over a roster."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.filters import has_completions
from prompt_toolkit.key_binding import KeyBindings

from chat_markup.ranker import rank_suggestions
from chat_markup.trigger import detect_trigger
from chat_markup.types import (
    ActiveTrigger,
    Config,
    Identity,
    RosterEntry,
    SpecialKeyword,
    Suggestion,
)

logger = logging.getLogger(__name__)

type RosterProvider = Callable[[], Sequence[RosterEntry] | None]

_KEYWORD_META = {
    "everyone": "Notify everyone in this conversation",
    "here": "Notify everyone online",
}


class MentionCompleter(Completer):
    """prompt-toolkit Completer that suggests mentions after an ``@``.

    The roster is fetched from *roster_provider* on every keystroke, so it
    always reflects the caller's latest snapshot. A failing provider is
    logged and treated as an empty roster: only ``@everyone``/``@here``
    are offered.
    """

    def __init__(
        self,
        roster_provider: RosterProvider,
        *,
        suppress_keywords: bool = False,
        config: Config | None = None,
    ) -> None:
        self._roster_provider = roster_provider
        self._suppress_keywords = suppress_keywords
        self._config = config or Config()

    def set_suppress_keywords(self, suppress: bool) -> None:
        """Toggle keyword suggestions (e.g. when switching to a direct message)."""
        self._suppress_keywords = suppress

    def get_completions(
        self,
        document: Document,
        complete_event: CompleteEvent,
    ) -> Iterable[Completion]:
        """Yield completions for the current input state."""
        caret = document.cursor_position
        trigger = detect_trigger(document.text, caret)
        if not isinstance(trigger, ActiveTrigger):
            return

        suggestions = rank_suggestions(
            trigger.query,
            self._fetch_roster(),
            suppress_keywords=self._suppress_keywords,
            limit=self._config.suggestion_limit,
        )
        for suggestion in suggestions:
            yield _to_completion(suggestion, start_position=trigger.anchor - caret)

    def _fetch_roster(self) -> Sequence[RosterEntry] | None:
        try:
            return self._roster_provider()
        except Exception as e:
            logger.warning("Roster provider failed, offering keywords only: %s", e)
            return None


def _to_completion(suggestion: Suggestion, start_position: int) -> Completion:
    match suggestion:
        case SpecialKeyword(keyword=keyword):
            return Completion(
                text=f"@{keyword} ",
                start_position=start_position,
                display=f"@{keyword}",
                display_meta=_KEYWORD_META.get(keyword, ""),
            )
        case Identity(display_name=display_name, handle=handle):
            return Completion(
                text=f"@{handle} ",
                start_position=start_position,
                display=f"@{handle}",
                display_meta=display_name,
            )
    raise TypeError(f"Unknown suggestion: {suggestion!r}")


def build_mention_key_bindings() -> KeyBindings:
    """Key bindings committing (Tab/Enter) or dismissing (Escape) the open menu."""
    kb = KeyBindings()

    @kb.add("tab", filter=has_completions)
    @kb.add("enter", filter=has_completions)
    def _commit(event: Any) -> None:
        buffer = event.current_buffer
        state = buffer.complete_state
        completion = state.current_completion or state.completions[0]
        buffer.apply_completion(completion)

    @kb.add("escape", filter=has_completions, eager=True)
    def _cancel(event: Any) -> None:
        event.current_buffer.cancel_completion()

    return kb
