class ChatMarkupError(Exception):
    """Base exception for all chat_markup errors."""


class ConfigError(ChatMarkupError):
    """Raised on invalid configuration values."""
