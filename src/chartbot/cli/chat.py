"""CLI: chartbot chat, chartbot send"""

import json
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from chartbot.cli.render import print_message
from chartbot.parser import parse

console = Console()


def _get_client():
    from chartbot.cli.main import _get_client
    return _get_client()


def _resolve_session(store, session_id):
    from chartbot.cli.main import _resolve_session
    return _resolve_session(store, session_id)


def _run(coro):
    from chartbot.cli.main import _run
    return _run(coro)


@click.command("chat")
@click.argument("session_id", required=False)
def chat_cmd(session_id: Optional[str]):
    """Interactive chat. Continues SESSION_ID, or the most recent chat."""

    async def _chat():
        client = _get_client()
        session = _resolve_session(client.store, session_id)
        client.select_chat(session.id)
        console.print(f"[dim]Chat: {escape(session.title)} ({session.id[:8]})[/dim]")
        for message in session.messages:
            print_message(console, message)
        console.print("[cyan]Type your message (/new for a fresh chat, /quit to exit)[/cyan]\n")
        try:
            while True:
                msg = click.prompt("You", prompt_suffix=": ")
                command = msg.strip().lower()
                if command in ("/quit", "/exit"):
                    break
                if command == "/new":
                    session = client.new_chat()
                    console.print(f"[dim]Chat: {escape(session.title)} ({session.id[:8]})[/dim]")
                    continue
                with console.status("Thinking..."):
                    reply = await client.send(msg, session.id)
                if reply is not None:
                    print_message(console, reply)
        except (KeyboardInterrupt, EOFError, click.Abort):
            pass
        finally:
            await client.close()

    _run(_chat())


@click.command("send")
@click.argument("message")
@click.option("-s", "--session", "session_id", default=None)
@click.option("--new", "new_chat", is_flag=True, help="Send in a fresh chat")
@click.option("--json-output", "--json", is_flag=True)
def send_cmd(message: str, session_id: Optional[str], new_chat: bool, json_output: bool):
    """Send a one-shot message."""

    async def _send():
        client = _get_client()
        try:
            if new_chat:
                session = client.new_chat()
            else:
                session = _resolve_session(client.store, session_id)
            reply = await client.send(message, session.id)
        finally:
            await client.close()

        if reply is None:
            console.print("[yellow]Nothing to send.[/yellow]")
            return
        if json_output:
            parsed = parse(reply.content)
            click.echo(json.dumps({
                "session_id": session.id,
                "message": reply.model_dump(by_alias=True),
                "text": parsed.text,
                "segments": [s.model_dump() for s in parsed.segments],
            }))
        else:
            print_message(console, reply)

    _run(_send())
