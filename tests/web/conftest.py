"""Shared fixtures for web API tests."""

import os
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import pytest
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient
from jose import jwt

from cli.config_models import MoodlogConfig
from journal.storage import SQLiteEntryStore
from web.auth import create_account
from web.user_store import init_db

_STORE_USERS = [
    "web.deps",
    "web.routes.entries",
    "web.routes.mood",
    "web.routes.stats",
    "web.routes.admin",
]


@pytest.fixture
def secret_key():
    return Fernet.generate_key().decode()


@pytest.fixture
def jwt_secret():
    return "test-jwt-secret"


@pytest.fixture
def users_db(tmp_path):
    """Fresh users.db for each test."""
    db_path = tmp_path / "users.db"
    init_db(db_path)
    return db_path


@pytest.fixture
def entry_store(tmp_path):
    return SQLiteEntryStore(tmp_path / "entries.db")


def _make_auth_token(jwt_secret, user, minutes=30):
    return jwt.encode(
        {
            "sub": user["id"],
            "email": user["email"],
            "name": user["name"],
            "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
        },
        jwt_secret,
        algorithm="HS256",
    )


@pytest.fixture
def user(users_db):
    return create_account("Test", "test@example.com", "secret123", db_path=users_db)


@pytest.fixture
def user_b(users_db):
    """Second user for isolation tests."""
    return create_account("UserB", "b@example.com", "secret456", db_path=users_db)


@pytest.fixture
def auth_headers(jwt_secret, user):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, user)}"}


@pytest.fixture
def auth_headers_b(jwt_secret, user_b):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, user_b)}"}


@pytest.fixture
def expired_headers(jwt_secret, user):
    return {"Authorization": f"Bearer {_make_auth_token(jwt_secret, user, minutes=-5)}"}


@pytest.fixture
def client(jwt_secret, secret_key, users_db, entry_store, monkeypatch):
    """Test client on tmp users.db + entries.db with default (local scoring) config."""
    for var in ("ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GROQ_API_KEY", "TOGETHER_API_KEY"):
        monkeypatch.delenv(var, raising=False)

    env = {
        "MOODLOG_JWT_SECRET": jwt_secret,
        "SECRET_KEY": secret_key,
        "MOODLOG_ADMIN_EMAILS": "admin@example.com",
    }
    config = MoodlogConfig()

    patches = [
        patch.dict(os.environ, env),
        patch("web.user_store._DEFAULT_DB_PATH", users_db),
        patch("web.deps.get_config", return_value=config),
        patch("web.routes.stats.get_config", return_value=config),
        *[patch(f"{mod}.get_entry_store", return_value=entry_store) for mod in _STORE_USERS],
    ]

    for p in patches:
        p.start()

    from web.app import app

    yield TestClient(app)

    for p in reversed(patches):
        p.stop()
