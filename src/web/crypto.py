"""Fernet encryption for per-user API keys stored in users.db."""

import structlog
from cryptography.fernet import Fernet, InvalidToken

logger = structlog.get_logger()


def _get_fernet(secret_key: str) -> Fernet:
    """Create Fernet instance from SECRET_KEY (must be 32-byte url-safe base64)."""
    return Fernet(secret_key.encode() if isinstance(secret_key, str) else secret_key)


def encrypt_value(secret_key: str, value: str) -> str:
    """Encrypt a string; returns the Fernet token as text."""
    return _get_fernet(secret_key).encrypt(value.encode()).decode()


def decrypt_value(secret_key: str, token: str, key_name: str | None = None) -> str | None:
    """Decrypt a Fernet token. Returns None (and logs) if the key no longer matches."""
    try:
        return _get_fernet(secret_key).decrypt(token.encode()).decode()
    except (InvalidToken, ValueError):
        logger.warning("crypto.decrypt_failed", key_name=key_name)
        return None
