"""Multi-user SQLite store: users table + per-user encrypted secrets."""

import os
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from db import wal_connect
from web.crypto import decrypt_value, encrypt_value

logger = structlog.get_logger()

_DEFAULT_DB_PATH = Path(os.environ.get("MOODLOG_HOME", Path.home() / "moodlog")) / "users.db"

_PUBLIC_FIELDS = "id, email, name, created_at"


class DuplicateEmailError(ValueError):
    """Email already registered."""


def _get_conn(db_path: Path | None = None) -> sqlite3.Connection:
    conn = wal_connect(db_path or _DEFAULT_DB_PATH, row_factory=True)
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


def init_db(db_path: Path | None = None) -> None:
    """Create tables if they don't exist."""
    conn = _get_conn(db_path)
    try:
        conn.executescript("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE COLLATE NOCASE,
                name TEXT NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            );
            CREATE TABLE IF NOT EXISTS user_secrets (
                user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                key TEXT NOT NULL,
                value TEXT NOT NULL,
                PRIMARY KEY (user_id, key)
            );
        """)
        conn.commit()
    finally:
        conn.close()


def create_user(
    email: str,
    name: str,
    password_hash: str,
    db_path: Path | None = None,
) -> dict[str, Any]:
    """Insert a new user. Returns public user dict.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    user_id = uuid.uuid4().hex
    now = datetime.now(timezone.utc).isoformat()
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "INSERT INTO users (id, email, name, password_hash, created_at) VALUES (?, ?, ?, ?, ?)",
            (user_id, email, name, password_hash, now),
        )
        conn.commit()
    except sqlite3.IntegrityError as e:
        raise DuplicateEmailError("Email already registered") from e
    finally:
        conn.close()
    logger.info("user_store.user_created", user_id=user_id)
    return {"id": user_id, "email": email, "name": name, "created_at": now}


def get_user_credentials(email: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """User row including password_hash, looked up by email (case-insensitive)."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def get_user(user_id: str, db_path: Path | None = None) -> dict[str, Any] | None:
    """Public user dict by id."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute(f"SELECT {_PUBLIC_FIELDS} FROM users WHERE id = ?", (user_id,)).fetchone()
        return dict(row) if row else None
    finally:
        conn.close()


def list_users(db_path: Path | None = None) -> list[dict[str, Any]]:
    """All users (public fields), oldest first."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(f"SELECT {_PUBLIC_FIELDS} FROM users ORDER BY created_at").fetchall()
        return [dict(r) for r in rows]
    finally:
        conn.close()


def get_user_secret(
    user_id: str,
    secret_key: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> str | None:
    """Get a single decrypted secret for a user."""
    conn = _get_conn(db_path)
    try:
        row = conn.execute(
            "SELECT value FROM user_secrets WHERE user_id = ? AND key = ?",
            (user_id, secret_key),
        ).fetchone()
        if not row:
            return None
        return decrypt_value(fernet_key, row["value"], key_name=secret_key)
    finally:
        conn.close()


def get_user_secrets(
    user_id: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> dict[str, str]:
    """Get all decrypted secrets for a user."""
    conn = _get_conn(db_path)
    try:
        rows = conn.execute(
            "SELECT key, value FROM user_secrets WHERE user_id = ?",
            (user_id,),
        ).fetchall()
        result = {}
        skipped = 0
        for row in rows:
            val = decrypt_value(fernet_key, row["value"], key_name=row["key"])
            if val is not None:
                result[row["key"]] = val
            else:
                skipped += 1
        if skipped:
            logger.warning(
                "user_store.secrets_skipped",
                user_id=user_id,
                total=len(rows),
                skipped=skipped,
            )
        return result
    finally:
        conn.close()


def set_user_secret(
    user_id: str,
    secret_key: str,
    value: str,
    fernet_key: str,
    db_path: Path | None = None,
) -> None:
    """Encrypt and store a secret for a user."""
    conn = _get_conn(db_path)
    try:
        encrypted = encrypt_value(fernet_key, value)
        conn.execute(
            "INSERT INTO user_secrets (user_id, key, value) VALUES (?, ?, ?) "
            "ON CONFLICT(user_id, key) DO UPDATE SET value = excluded.value",
            (user_id, secret_key, encrypted),
        )
        conn.commit()
        logger.info("user_store.secret_saved", user_id=user_id, key=secret_key)
    finally:
        conn.close()


def delete_user_secret(
    user_id: str,
    secret_key: str,
    db_path: Path | None = None,
) -> None:
    """Remove a secret for a user."""
    conn = _get_conn(db_path)
    try:
        conn.execute(
            "DELETE FROM user_secrets WHERE user_id = ? AND key = ?",
            (user_id, secret_key),
        )
        conn.commit()
    finally:
        conn.close()
