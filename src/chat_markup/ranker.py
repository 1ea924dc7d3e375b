"""Suggestion ranking for mention completion."""

from __future__ import annotations

from collections.abc import Iterable

from chat_markup.constants import MAX_SUGGESTIONS, SPECIAL_KEYWORDS
from chat_markup.types import Identity, RosterEntry, SpecialKeyword, Suggestion


def rank_suggestions(
    query: str,
    roster: Iterable[RosterEntry] | None,
    *,
    suppress_keywords: bool = False,
    limit: int = MAX_SUGGESTIONS,
) -> list[Suggestion]:
    """Return ordered mention candidates for *query*.

    Special keywords come first (unless *suppress_keywords*, used in
    two-party conversations), then roster entries whose display name or
    handle contains the query case-insensitively, in roster order. The
    result never exceeds ``min(limit, MAX_SUGGESTIONS)`` entries. A missing
    roster is treated as empty.
    """
    limit = max(0, min(limit, MAX_SUGGESTIONS))
    needle = query.casefold()
    suggestions: list[Suggestion] = []

    if not suppress_keywords:
        suggestions.extend(
            SpecialKeyword(keyword) for keyword in SPECIAL_KEYWORDS if needle in keyword
        )

    for entry in roster or ():
        if len(suggestions) >= limit:
            break
        if needle in entry.display_name.casefold() or needle in entry.handle.casefold():
            suggestions.append(Identity.from_roster(entry))

    return suggestions[:limit]
