"""Mention composer state machine - selection, commit and cancel for ``@`` suggestions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from chat_markup.ranker import rank_suggestions
from chat_markup.trigger import detect_trigger
from chat_markup.types import (
    NO_TRIGGER,
    ActiveTrigger,
    Config,
    RosterEntry,
    Suggestion,
    TriggerState,
)


@dataclass(frozen=True)
class ComposerState:
    text: str = ""
    caret: int = 0
    trigger: TriggerState = NO_TRIGGER
    suggestions: tuple[Suggestion, ...] = ()
    selected: int = 0

    @property
    def active(self) -> bool:
        return isinstance(self.trigger, ActiveTrigger) and bool(self.suggestions)

    @property
    def selection(self) -> Suggestion | None:
        if not self.suggestions:
            return None
        return self.suggestions[self.selected]


class MentionComposer:
    """Tracks the composer buffer and the suggestion list for an ``@`` trigger.

    Every ``update`` recomputes the trigger and the suggestion list from
    scratch; nothing is cached between edits. Key handling follows the
    composer contract: Down/Up cycle the selection, Tab/Enter commit it and
    Escape dismisses the list without touching the text.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        suppress_keywords: bool = False,
    ) -> None:
        self._config = config or Config()
        self._suppress_keywords = suppress_keywords
        self._state = ComposerState()

    @property
    def state(self) -> ComposerState:
        return self._state

    def update(
        self,
        text: str,
        caret: int,
        roster: Iterable[RosterEntry] | None = None,
    ) -> ComposerState:
        """Re-evaluate the trigger for a text edit or caret move."""
        caret = max(0, min(caret, len(text)))
        trigger = detect_trigger(text, caret)
        suggestions: tuple[Suggestion, ...] = ()
        if isinstance(trigger, ActiveTrigger):
            suggestions = tuple(
                rank_suggestions(
                    trigger.query,
                    roster,
                    suppress_keywords=self._suppress_keywords,
                    limit=self._config.suggestion_limit,
                )
            )
        self._state = ComposerState(
            text=text,
            caret=caret,
            trigger=trigger,
            suggestions=suggestions,
        )
        return self._state

    def move_down(self) -> None:
        self._move(1)

    def move_up(self) -> None:
        self._move(-1)

    def _move(self, step: int) -> None:
        count = len(self._state.suggestions)
        if count == 0:
            return
        self._state = replace(self._state, selected=(self._state.selected + step) % count)

    def commit(self) -> bool:
        """Splice the selected suggestion into the buffer.

        Replaces ``[anchor, caret)`` with ``@handle `` and moves the caret past
        the trailing space. Returns False when there is nothing to commit.
        """
        state = self._state
        trigger = state.trigger
        selection = state.selection
        if not isinstance(trigger, ActiveTrigger) or selection is None:
            return False

        insert = f"@{selection.handle} "
        text = state.text[: trigger.anchor] + insert + state.text[state.caret :]
        self._state = ComposerState(text=text, caret=trigger.anchor + len(insert))
        return True

    def cancel(self) -> None:
        """Dismiss the trigger, leaving the buffer unchanged."""
        self._state = ComposerState(text=self._state.text, caret=self._state.caret)

    def handle_key(self, key: str) -> bool:
        """Apply a navigation key. Returns True if the key was consumed.

        Escape dismisses any open trigger, even one with no matches; the
        other keys need a non-empty suggestion list.
        """
        if key == "escape" and isinstance(self._state.trigger, ActiveTrigger):
            self.cancel()
            return True
        if not self._state.active:
            return False
        if key == "down":
            self.move_down()
        elif key == "up":
            self.move_up()
        elif key in ("tab", "enter"):
            return self.commit()
        else:
            return False
        return True
