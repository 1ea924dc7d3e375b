from __future__ import annotations

from chat_markup.types import NO_TRIGGER, ActiveTrigger, TriggerState


def detect_trigger(text: str, caret: int) -> TriggerState:
    """Decide whether the caret sits inside an in-progress ``@`` mention.

    Scans backward from *caret* to the nearest ``@`` on the same line. The
    trigger is active only when the span between ``@`` and the caret holds no
    whitespace and the ``@`` starts a token (start of text or preceded by
    whitespace). Out-of-range carets are clamped. Never raises.
    """
    caret = max(0, min(caret, len(text)))

    index = caret - 1
    while index >= 0:
        ch = text[index]
        if ch == "@":
            break
        if ch.isspace():
            # Covers both a newline before any '@' and whitespace in the query.
            return NO_TRIGGER
        index -= 1
    else:
        return NO_TRIGGER

    if index > 0 and not text[index - 1].isspace():
        return NO_TRIGGER

    return ActiveTrigger(anchor=index, query=text[index + 1 : caret])
