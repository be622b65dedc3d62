"""Shared CLI utilities."""

import os
import sys

import structlog
from rich.console import Console

from journal.session import JournalSession

console = Console()
logger = structlog.get_logger()


def get_components(wait_ready: bool = True):
    """Initialize config, entry store, and session file.

    Args:
        wait_ready: Block (bounded) until the entry store answers
    """
    from cli.config import get_paths, load_config_model
    from journal.session import SessionFile
    from journal.storage import StoreNotReadyError, create_entry_store
    from web.user_store import init_db

    try:
        config_model = load_config_model()
    except ValueError as e:
        console.print(f"[red]Config error:[/] {e}")
        sys.exit(1)

    config = config_model.to_dict()
    paths = get_paths(config)

    store = create_entry_store(config_model.storage.backend, paths)
    if wait_ready:
        try:
            store.wait_until_ready(timeout=config_model.storage.ready_timeout)
        except StoreNotReadyError as e:
            console.print(f"[red]Error:[/] {e}")
            sys.exit(1)

    init_db(paths["users_db"])

    return {
        "config": config,
        "config_model": config_model,
        "paths": paths,
        "store": store,
        "session_file": SessionFile(paths["session_file"]),
    }


def require_session(c: dict) -> JournalSession:
    """Load the saved session; exit if nobody is logged in."""
    session = c["session_file"].load()
    if not session.is_authenticated:
        console.print("[yellow]Not logged in. Run 'moodlog login' first.[/]")
        sys.exit(1)
    return session


def get_fernet_key() -> str | None:
    return os.getenv("SECRET_KEY")


def get_scorer(c: dict, user_id: str):
    """Mood scorer for user_id: stored provider/key first, then config."""
    from journal.sentiment import create_mood_scorer
    from web.user_store import get_user_secrets

    secrets = {}
    fernet_key = get_fernet_key()
    if fernet_key:
        secrets = get_user_secrets(user_id, fernet_key, db_path=c["paths"]["users_db"])

    cfg = c["config_model"]
    return create_mood_scorer(
        cfg.llm.model_dump(),
        retry_config=cfg.retry.model_dump(),
        provider=secrets.get("llm_provider"),
        api_key=secrets.get("llm_api_key"),
    )
