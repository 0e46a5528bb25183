"""CLI: chartbot auth login|status|logout"""

import os
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

console = Console()


def _load_config() -> dict:
    from chartbot.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from chartbot.cli.main import _save_config
    _save_config(cfg)


def _mask(key: str) -> str:
    return f"{key[:4]}…{key[-4:]}" if len(key) > 8 else "****"


@click.group()
def auth():
    """API key management."""


@auth.command("login")
@click.option("--model", default=None, help="Model name to request")
@click.option("--base-url", default=None, help="Chat-completion API base URL")
def auth_login(model: Optional[str], base_url: Optional[str]):
    """Save an API key for the chat-completion provider."""
    cfg = _load_config()
    api_key = click.prompt("API key", hide_input=True).strip()
    if not api_key:
        console.print("[red]Empty API key, nothing saved.[/red]")
        raise SystemExit(1)

    updated = {**cfg, "api_key": api_key}
    if model:
        updated["model"] = model
    if base_url:
        updated["base_url"] = base_url
    _save_config(updated)

    from chartbot.cli.main import CONFIG_FILE
    console.print(f"[green]API key saved ({_mask(api_key)}).[/green]")
    console.print(f"[dim]Stored in {escape(str(CONFIG_FILE))}[/dim]")


@auth.command("status")
def auth_status():
    """Show which API key will be used."""
    from chartbot.cli.main import API_KEY_ENV
    env_key = os.environ.get(API_KEY_ENV)
    cfg = _load_config()
    if env_key:
        console.print(f"[green]Using {API_KEY_ENV}[/green] ({_mask(env_key)})")
    elif cfg.get("api_key"):
        console.print(f"[green]Logged in[/green] with saved key ({_mask(cfg['api_key'])})")
    else:
        console.print("[yellow]No API key. Run `chartbot auth login`.[/yellow]")
    if cfg.get("model"):
        console.print(f"[dim]Model: {cfg['model']}[/dim]")


@auth.command("logout")
def auth_logout():
    """Forget the saved API key."""
    cfg = _load_config()
    cfg.pop("api_key", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
