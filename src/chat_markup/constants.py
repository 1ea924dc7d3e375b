"""Central constants for chat_markup."""

# Platform message-length ceiling; longer input is still formatted.
MAX_MESSAGE_LENGTH = 4000

# Nesting cap for recursive inline styles. Bodies below the cap are kept as literal text.
MAX_INLINE_DEPTH = 16

# Upper bound on the suggestion list shown while composing a mention.
MAX_SUGGESTIONS = 10

# Keywords offered ahead of roster identities, in display order.
SPECIAL_KEYWORDS: tuple[str, ...] = ("everyone", "here")

CODE_FENCE = "```"
QUOTE_PREFIX = "> "
MAX_HEADING_LEVEL = 3

# Characters that may open an inline construct; everything else is plain text.
INLINE_MARKERS = frozenset("`*_~|@")
