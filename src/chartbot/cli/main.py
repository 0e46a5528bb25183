"""
Chartbot CLI — `chartbot` command.

Commands:
  chartbot auth login            Save an API key
  chartbot chat [session-id]     Interactive REPL chat
  chartbot send <message>        One-shot message
  chartbot sessions <cmd>        List, create, rename, delete, show chats
"""

import asyncio
import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Iterator, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from chartbot import __version__
from chartbot.client import AsyncChartbot
from chartbot.completion import DEFAULT_MODEL
from chartbot.errors import ChartbotError, ConfigError
from chartbot.models.session import ChatSession
from chartbot.storage import DEFAULT_DATA_DIR
from chartbot.store import ChatStore
from chartbot.transport.http import DEFAULT_BASE_URL

console = Console()
CONFIG_FILE = Path.home() / ".chartbot" / "config.json"
API_KEY_ENV = "MISTRAL_API_KEY"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client(require_key: bool = True) -> AsyncChartbot:
    cfg = _load_config()
    api_key = os.environ.get(API_KEY_ENV) or cfg.get("api_key")
    if require_key and not api_key:
        raise ConfigError(f"No API key. Run `chartbot auth login` or set {API_KEY_ENV}.")
    return AsyncChartbot(
        api_key=api_key,
        model=cfg.get("model", DEFAULT_MODEL),
        base_url=cfg.get("base_url", DEFAULT_BASE_URL),
        data_dir=cfg.get("data_dir") or DEFAULT_DATA_DIR,
    )


def _resolve_session(store: ChatStore, session_id: Optional[str]) -> ChatSession:
    """Look up a session by full id or unique id prefix; default to the selected one."""
    if not session_id:
        session = store.selected_session
        if session is None:
            raise ConfigError("No chat selected.")
        return session
    matches = [s for s in store if s.id == session_id or s.id.startswith(session_id)]
    if len(matches) != 1:
        raise ConfigError(f"No unique chat matches {session_id!r}.")
    return matches[0]


@contextlib.contextmanager
def _errors() -> Iterator[None]:
    """Turn ChartbotError into a red message and exit code 1."""
    try:
        yield
    except ChartbotError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)


def _run(coro):
    with _errors():
        return asyncio.run(coro)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Chartbot CLI — chat with an LLM, keep your history locally."""
    _configure_logging(verbose)


# Register subcommands from separate modules
from chartbot.cli.auth import auth
from chartbot.cli.chat import chat_cmd, send_cmd
from chartbot.cli.sessions import sessions

main.add_command(auth)
main.add_command(chat_cmd)
main.add_command(send_cmd)
main.add_command(sessions)


if __name__ == "__main__":
    main()
