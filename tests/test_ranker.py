"""Tests for the suggestion ranker."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from chat_markup.constants import MAX_SUGGESTIONS
from chat_markup.ranker import rank_suggestions
from chat_markup.types import Identity, RosterEntry, SpecialKeyword


def _handles(suggestions) -> list[str]:
    return [s.handle for s in suggestions]


def _entry(handle: str, display_name: str = "") -> RosterEntry:
    return RosterEntry(id=f"id-{handle}", display_name=display_name or handle.title(), handle=handle)


class TestOrdering:
    def test_keywords_then_roster(self):
        roster = [_entry("annie"), _entry("hermes")]
        assert _handles(rank_suggestions("e", roster)) == ["everyone", "here", "annie", "hermes"]

    def test_keywords_need_a_matching_query(self):
        # "an" is not a substring of either keyword, so only roster entries match
        roster = [_entry("annie"), _entry("anton")]
        assert _handles(rank_suggestions("an", roster)) == ["annie", "anton"]

    def test_empty_query_matches_everything(self, roster):
        result = rank_suggestions("", roster)
        assert _handles(result) == ["everyone", "here", "annie", "anton", "grace", "xfiles"]

    def test_roster_order_preserved(self):
        roster = [_entry("zed"), _entry("amy"), _entry("mia")]
        assert _handles(rank_suggestions("m", roster, suppress_keywords=True)) == ["amy", "mia"]


class TestKeywords:
    def test_keyword_substring(self):
        assert _handles(rank_suggestions("ery", [])) == ["everyone"]

    def test_here_substring(self):
        assert _handles(rank_suggestions("er", [])) == ["everyone", "here"]

    def test_keyword_case_insensitive(self):
        assert rank_suggestions("HER", []) == [SpecialKeyword("here")]

    def test_suppressed_in_two_party_conversation(self, roster):
        result = rank_suggestions("", roster, suppress_keywords=True)
        assert all(isinstance(s, Identity) for s in result)

    def test_non_matching_query(self):
        assert rank_suggestions("zzz", []) == []


class TestRosterFilter:
    def test_matches_display_name(self, roster):
        result = rank_suggestions("hopper", roster)
        assert result == [
            Identity(id="u3", display_name="Grace Hopper", handle="grace", avatar_ref=None)
        ]

    def test_matches_handle(self, roster):
        assert _handles(rank_suggestions("xfi", roster)) == ["xfiles"]

    def test_case_insensitive(self, roster):
        assert _handles(rank_suggestions("ANN", roster)) == ["annie"]

    def test_avatar_ref_carried(self, roster):
        (annie,) = rank_suggestions("annie", roster)
        assert annie.avatar_ref == "a.png"

    def test_missing_roster_degrades_to_keywords(self):
        assert _handles(rank_suggestions("", None)) == ["everyone", "here"]


class TestCap:
    def test_fifty_matches_yield_ten(self):
        roster = [_entry(f"user{i}") for i in range(50)]
        assert len(rank_suggestions("user", roster)) == MAX_SUGGESTIONS

    def test_keywords_count_toward_cap(self):
        roster = [_entry(f"user{i}") for i in range(50)]
        result = rank_suggestions("", roster)
        assert len(result) == 10
        assert _handles(result)[:3] == ["everyone", "here", "user0"]

    def test_limit_cannot_exceed_cap(self):
        roster = [_entry(f"user{i}") for i in range(50)]
        assert len(rank_suggestions("user", roster, limit=25)) == MAX_SUGGESTIONS

    def test_smaller_limit(self):
        roster = [_entry(f"user{i}") for i in range(50)]
        assert len(rank_suggestions("", roster, limit=3)) == 3


# --- Property-based tests ---


_ROSTER = st.lists(
    st.builds(
        RosterEntry,
        id=st.uuids().map(str),
        display_name=st.text(max_size=12),
        handle=st.text(min_size=1, max_size=12),
    ),
    max_size=30,
)


@pytest.mark.property
class TestRankerProperties:
    @given(query=st.text(max_size=8), roster=_ROSTER, suppress=st.booleans())
    def test_bounded_and_ordered(self, query: str, roster: list[RosterEntry], suppress: bool):
        result = rank_suggestions(query, roster, suppress_keywords=suppress)
        assert len(result) <= MAX_SUGGESTIONS

        kinds = [isinstance(s, SpecialKeyword) for s in result]
        # keywords only ever form a prefix of the list
        assert kinds == sorted(kinds, reverse=True)
        if suppress:
            assert not any(kinds)

        identity_ids = [s.id for s in result if isinstance(s, Identity)]
        roster_ids = [e.id for e in roster]
        positions = [roster_ids.index(i) for i in identity_ids]
        assert positions == sorted(positions)
