"""Tests for user_store: user CRUD, secrets CRUD, isolation."""

import pytest
from cryptography.fernet import Fernet

from web.user_store import (
    DuplicateEmailError,
    create_user,
    delete_user_secret,
    get_user,
    get_user_credentials,
    get_user_secret,
    get_user_secrets,
    init_db,
    list_users,
    set_user_secret,
)


@pytest.fixture
def db(tmp_path):
    path = tmp_path / "users.db"
    init_db(path)
    return path


@pytest.fixture
def fernet_key():
    return Fernet.generate_key().decode()


def test_create_user(db):
    user = create_user("a@b.com", "Alice", "hash", db_path=db)
    assert user["email"] == "a@b.com"
    assert get_user(user["id"], db_path=db)["name"] == "Alice"


def test_public_user_has_no_hash(db):
    user = create_user("a@b.com", "Alice", "hash", db_path=db)
    assert "password_hash" not in get_user(user["id"], db_path=db)
    assert get_user_credentials("a@b.com", db_path=db)["password_hash"] == "hash"


def test_duplicate_email_case_insensitive(db):
    create_user("a@b.com", "Alice", "hash", db_path=db)
    with pytest.raises(DuplicateEmailError):
        create_user("A@B.com", "Alice2", "hash", db_path=db)


def test_unknown_user(db):
    assert get_user("nope", db_path=db) is None
    assert get_user_credentials("nope@x.com", db_path=db) is None


def test_list_users(db):
    create_user("a@b.com", "A", "h", db_path=db)
    create_user("c@d.com", "C", "h", db_path=db)
    assert [u["email"] for u in list_users(db_path=db)] == ["a@b.com", "c@d.com"]


def test_init_db_idempotent(db):
    init_db(db)
    init_db(db)


def test_set_get_secret(db, fernet_key):
    uid = create_user("a@b.com", "A", "h", db_path=db)["id"]
    set_user_secret(uid, "llm_api_key", "sk-abc", fernet_key, db)
    assert get_user_secret(uid, "llm_api_key", fernet_key, db) == "sk-abc"


def test_overwrite_and_delete_secret(db, fernet_key):
    uid = create_user("a@b.com", "A", "h", db_path=db)["id"]
    set_user_secret(uid, "llm_api_key", "old", fernet_key, db)
    set_user_secret(uid, "llm_api_key", "new", fernet_key, db)
    assert get_user_secrets(uid, fernet_key, db) == {"llm_api_key": "new"}
    delete_user_secret(uid, "llm_api_key", db)
    assert get_user_secret(uid, "llm_api_key", fernet_key, db) is None


def test_wrong_key_skips_secret(db, fernet_key):
    uid = create_user("a@b.com", "A", "h", db_path=db)["id"]
    set_user_secret(uid, "llm_api_key", "sk-abc", fernet_key, db)
    other = Fernet.generate_key().decode()
    assert get_user_secrets(uid, other, db) == {}


def test_secrets_isolated(db, fernet_key):
    a = create_user("a@b.com", "A", "h", db_path=db)["id"]
    b = create_user("c@d.com", "B", "h", db_path=db)["id"]
    set_user_secret(a, "llm_api_key", "sk-a", fernet_key, db)
    assert get_user_secrets(b, fernet_key, db) == {}
