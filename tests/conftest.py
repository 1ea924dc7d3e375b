import pytest

from chat_markup.types import Config, RosterEntry, Theme


@pytest.fixture
def default_config():
    return Config()


@pytest.fixture
def default_theme():
    return Theme()


@pytest.fixture
def roster():
    return [
        RosterEntry(id="u1", display_name="Annie Easley", handle="annie", avatar_ref="a.png"),
        RosterEntry(id="u2", display_name="Anton Chekhov", handle="anton"),
        RosterEntry(id="u3", display_name="Grace Hopper", handle="grace"),
        RosterEntry(id="u4", display_name="Fox Mulder", handle="xfiles"),
    ]
