"""CLI: chartbot sessions list|new|rename|delete|show"""

import json

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from chartbot.cli.render import print_message

console = Console()


def _get_client():
    from chartbot.cli.main import _get_client
    return _get_client(require_key=False)


def _resolve_session(store, session_id):
    from chartbot.cli.main import _resolve_session
    return _resolve_session(store, session_id)


def _errors():
    from chartbot.cli.main import _errors
    return _errors()


@click.group()
def sessions():
    """Chat history management."""


@sessions.command("list")
@click.option("--json-output", "--json", is_flag=True)
def sessions_list(json_output):
    """List chats, most recent first."""
    with _errors():
        store = _get_client().store
        if json_output:
            click.echo(store.dump().decode("utf-8"))
            return
        table = Table(title=f"Chats ({len(store)} total)")
        table.add_column("ID", style="bold")
        table.add_column("Title")
        table.add_column("Created")
        table.add_column("Messages", justify="right")
        for s in store:
            table.add_row(s.id[:8], escape(s.title), s.created_at.strftime("%Y-%m-%d %H:%M"), str(len(s.messages)))
        console.print(table)


@sessions.command("new")
def sessions_new():
    """Start a new chat."""
    with _errors():
        session = _get_client().new_chat()
        console.print(f"[green]Chat created: {escape(session.title)} ({session.id})[/green]")


@sessions.command("rename")
@click.argument("session_id")
@click.argument("title")
def sessions_rename(session_id, title):
    """Rename a chat. A blank TITLE resets it to "New Chat"."""
    with _errors():
        client = _get_client()
        session = _resolve_session(client.store, session_id)
        client.rename_chat(session.id, title)
        console.print(f"[green]Renamed to {escape(repr(client.store.get(session.id).title))}.[/green]")


@sessions.command("delete")
@click.argument("session_id")
def sessions_delete(session_id):
    """Delete a chat."""
    with _errors():
        client = _get_client()
        session = _resolve_session(client.store, session_id)
        client.delete_chat(session)
        console.print(f"[green]Chat {session.id[:8]} deleted.[/green]")


@sessions.command("show")
@click.argument("session_id", required=False)
@click.option("--json-output", "--json", is_flag=True)
def sessions_show(session_id, json_output):
    """Print a chat's messages (default: most recent chat)."""
    with _errors():
        client = _get_client()
        session = _resolve_session(client.store, session_id)
        if json_output:
            click.echo(json.dumps(session.model_dump(mode="json", by_alias=True), indent=2))
            return
        console.rule(escape(session.title))
        if not session.messages:
            console.print("[dim]No messages yet.[/dim]")
        for message in session.messages:
            print_message(console, message)
