"""Demo composer for chat_markup.

Shows how the pieces fit together in a terminal:

- Typing ``@`` opens a mention dropdown fed by a static roster
  (Tab/Enter commits, Escape dismisses)
- Submitted messages are formatted and rendered with rich
  (bold, italics, underline, ~~strike~~, ||spoilers||, `code`, fences, quotes)
- ``/dm`` toggles two-party mode, which hides @everyone / @here
- ``/reveal`` toggles every spoiler of the last message

Usage:
    uv run python -m examples.chat_demo
"""

from __future__ import annotations

import asyncio

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import HTML
from rich.console import Console
from rich.text import Text

from chat_markup import RosterEntry, format_message, load_config
from chat_markup.completer import MentionCompleter, build_mention_key_bindings
from chat_markup.render import MessageRenderer, spoiler_keys

ROSTER = [
    RosterEntry(id="1", display_name="Annie Easley", handle="annie"),
    RosterEntry(id="2", display_name="Anton Chekhov", handle="anton"),
    RosterEntry(id="3", display_name="Grace Hopper", handle="grace"),
    RosterEntry(id="4", display_name="Ken Thompson", handle="ken"),
]


async def main() -> None:
    config = load_config().config
    console = Console()
    renderer = MessageRenderer(
        config.theme,
        mention_resolver=lambda token: any(e.handle == token for e in ROSTER),
    )
    completer = MentionCompleter(lambda: ROSTER, config=config)
    session: PromptSession[str] = PromptSession(
        completer=completer,
        complete_while_typing=True,
        key_bindings=build_mention_key_bindings(),
    )

    direct_message = False
    last_document = None

    while True:
        try:
            raw = await session.prompt_async(HTML("<style fg='green'>❯ </style>"))
        except (EOFError, KeyboardInterrupt):
            break

        command = raw.strip()
        if command == "/quit":
            break
        if command == "/dm":
            direct_message = not direct_message
            completer.set_suppress_keywords(direct_message)
            console.print(Text(f"Direct message mode: {direct_message}", style="cyan"))
            continue
        if command == "/reveal":
            if last_document is not None:
                for key in spoiler_keys(last_document):
                    renderer.toggle_spoiler(key)
                console.print(renderer.render(last_document))
            continue

        last_document = format_message(raw, config)
        renderer.reset()
        console.print(renderer.render(last_document))


if __name__ == "__main__":
    asyncio.run(main())
