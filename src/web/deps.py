"""Dependency injection for FastAPI routes."""

import os
from functools import lru_cache

import structlog

from cli.config import get_paths, load_config_model
from journal.sentiment import MoodScorer, create_mood_scorer
from journal.storage import EntryStore, create_entry_store
from web.user_store import get_user_secrets

logger = structlog.get_logger()

SECRET_KEY_FIELDS = ["llm_api_key"]


@lru_cache
def get_config():
    """Load shared config (see cli.config.find_config)."""
    return load_config_model()


def get_moodlog_paths() -> dict:
    """Expanded paths dict from config."""
    return get_paths(get_config().to_dict())


@lru_cache
def get_entry_store() -> EntryStore:
    """Process-wide entry store for the configured backend."""
    config = get_config()
    return create_entry_store(config.storage.backend, get_moodlog_paths())


def get_secret_key() -> str:
    """Get Fernet secret key from env."""
    key = os.getenv("SECRET_KEY")
    if not key:
        raise RuntimeError("SECRET_KEY env var required for API key encryption")
    return key


# --- Per-user secrets ---


def get_decrypted_secrets_for_user(user_id: str) -> dict:
    """Load all decrypted secrets for a specific user."""
    return get_user_secrets(user_id, get_secret_key())


def get_scorer_for_user(user_id: str) -> MoodScorer:
    """Mood scorer using the user's provider/key when set, else the shared config."""
    secrets = get_decrypted_secrets_for_user(user_id)
    config = get_config()
    return create_mood_scorer(
        config.llm.model_dump(),
        retry_config=config.retry.model_dump(),
        provider=secrets.get("llm_provider"),
        api_key=secrets.get("llm_api_key"),
    )


def _hint(value: str | None) -> str | None:
    """Return last 4 chars as hint, or None."""
    if not value or len(value) < 4:
        return None
    return f"...{value[-4:]}"


def get_settings_mask_for_user(user_id: str) -> dict:
    """Return settings with bool mask for secrets, per-user."""
    secrets = get_decrypted_secrets_for_user(user_id)
    config = get_config()

    return {
        "llm_provider": secrets.get("llm_provider") or config.llm.provider,
        "llm_model": config.llm.model,
        "llm_api_key_set": bool(secrets.get("llm_api_key")),
        "llm_api_key_hint": _hint(secrets.get("llm_api_key")),
    }
