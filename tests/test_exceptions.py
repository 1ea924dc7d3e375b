"""Tests for the exception hierarchy."""

import pytest

from chat_markup.exceptions import ChatMarkupError, ConfigError


class TestExceptionHierarchy:
    def test_base_exception(self):
        e = ChatMarkupError("base error")
        assert str(e) == "base error"
        assert isinstance(e, Exception)

    def test_config_error_inherits(self):
        e = ConfigError("config bad")
        assert isinstance(e, ChatMarkupError)
        assert str(e) == "config bad"


class TestExceptionCatching:
    def test_catch_with_base(self):
        with pytest.raises(ChatMarkupError):
            raise ConfigError("c")

    def test_with_cause(self):
        cause = ValueError("root cause")
        e = ConfigError("config failed")
        e.__cause__ = cause
        assert e.__cause__ is cause
