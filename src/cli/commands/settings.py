"""Per-user LLM provider and API key commands."""

import sys

import click
from rich.console import Console

from cli.utils import get_components, get_fernet_key, require_session
from llm import REMOTE_PROVIDERS

console = Console()


def _require_fernet_key() -> str:
    key = get_fernet_key()
    if not key:
        console.print("[red]Error:[/] SECRET_KEY env var required for API key encryption")
        sys.exit(1)
    return key


@click.group()
def key():
    """Manage your LLM provider and API key (stored encrypted)."""


@key.command("set")
@click.option(
    "-p",
    "--provider",
    type=click.Choice(["auto", *REMOTE_PROVIDERS]),
    default="auto",
    help="LLM provider (auto = detect from key)",
)
@click.option("--api-key", prompt=True, hide_input=True, help="Provider API key")
def key_set(provider: str, api_key: str):
    """Save an API key for remote mood scoring."""
    from web.user_store import set_user_secret

    c = get_components(wait_ready=False)
    session = require_session(c)
    fernet_key = _require_fernet_key()
    db_path = c["paths"]["users_db"]

    set_user_secret(session.user_id, "llm_provider", provider, fernet_key, db_path=db_path)
    set_user_secret(session.user_id, "llm_api_key", api_key.strip(), fernet_key, db_path=db_path)
    console.print(f"[green]Saved[/] {provider} key ...{api_key.strip()[-4:]}")


@key.command("show")
def key_show():
    """Show which provider is configured (never the key itself)."""
    from web.user_store import get_user_secrets

    c = get_components(wait_ready=False)
    session = require_session(c)
    secrets = get_user_secrets(session.user_id, _require_fernet_key(), db_path=c["paths"]["users_db"])

    provider = secrets.get("llm_provider") or c["config_model"].llm.provider
    api_key = secrets.get("llm_api_key")
    console.print(f"[bold]Provider:[/] {provider}")
    if api_key and len(api_key) >= 4:
        console.print(f"[bold]API key:[/] ...{api_key[-4:]}")
    else:
        console.print("[bold]API key:[/] [dim]not set (using config/env)[/]")


@key.command("clear")
def key_clear():
    """Forget your provider and API key."""
    from web.user_store import delete_user_secret

    c = get_components(wait_ready=False)
    session = require_session(c)
    for name in ("llm_provider", "llm_api_key"):
        delete_user_secret(session.user_id, name, db_path=c["paths"]["users_db"])
    console.print("[green]Cleared[/] stored provider and key")
