"""Render chat messages as terminal bubbles: prose first, then code panels."""

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from chartbot.models.session import Message
from chartbot.parser import parse

USER_LABEL = "You"
ASSISTANT_LABEL = "Chartbot"


def print_message(console: Console, message: Message) -> None:
    label = Text(f"{USER_LABEL}: " if message.is_user else f"{ASSISTANT_LABEL}: ",
                 style="bold cyan" if message.is_user else "bold green")
    parsed = parse(message.content)

    # "[x] no fence" has neither prose nor code; show it raw.
    if not parsed.text and not parsed.segments:
        console.print(label + Text(message.content))
        return

    if parsed.text:
        console.print(label + Text(parsed.text))
    else:
        console.print(label)

    for segment in parsed.segments:
        if segment.explanation and segment.explanation != parsed.text:
            console.print(Text(segment.explanation))
        console.print(Panel(
            Syntax(segment.code, segment.language.lower(), theme="monokai", word_wrap=True),
            title=Text(segment.language),
            title_align="left",
            border_style="dim",
        ))
