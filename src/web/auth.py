"""Accounts, password hashing, and JWT validation for FastAPI."""

import os
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from web.user_store import create_user, get_user, get_user_credentials

logger = structlog.get_logger()

ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = 60 * 24 * 7
MIN_PASSWORD_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

security = HTTPBearer()


class AccountError(ValueError):
    """Signup input rejected."""


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def validate_signup(name: str, email: str, password: str, confirm: str | None = None) -> None:
    """Check signup fields.

    Raises:
        AccountError: Missing fields, bad email, mismatched or short password
    """
    if not (name or "").strip() or not (email or "").strip() or not password:
        raise AccountError("Please fill in all fields")
    if not _EMAIL_RE.match(normalize_email(email)):
        raise AccountError("Please enter a valid email address")
    if confirm is not None and password != confirm:
        raise AccountError("Passwords do not match")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise AccountError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def create_account(
    name: str,
    email: str,
    password: str,
    confirm: str | None = None,
    db_path: Path | None = None,
) -> dict:
    """Validate and register a new user. Returns public user dict.

    Raises:
        AccountError: Invalid input
        DuplicateEmailError: Email already registered
    """
    validate_signup(name, email, password, confirm)
    return create_user(
        normalize_email(email),
        name.strip(),
        hash_password(password),
        db_path=db_path,
    )


def authenticate(email: str, password: str, db_path: Path | None = None) -> dict | None:
    """Return the public user dict, or None on unknown email / wrong password."""
    row = get_user_credentials(normalize_email(email), db_path=db_path)
    if not row or not verify_password(password or "", row["password_hash"]):
        logger.info("auth.login_failed")
        return None
    return {"id": row["id"], "email": row["email"], "name": row["name"], "created_at": row["created_at"]}


def _get_jwt_secret() -> str:
    secret = os.getenv("MOODLOG_JWT_SECRET")
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="MOODLOG_JWT_SECRET not configured",
        )
    return secret


def create_access_token(user: dict, expires_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    payload = {
        "sub": user["id"],
        "email": user.get("email"),
        "name": user.get("name"),
        "exp": expire,
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=ALGORITHM)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> dict:
    """Decode JWT and resolve it to a registered user."""
    token = credentials.credentials
    try:
        payload = jwt.decode(token, _get_jwt_secret(), algorithms=[ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing sub",
        )
    user = get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )
    return user


def _admin_emails() -> set[str]:
    raw = os.getenv("MOODLOG_ADMIN_EMAILS", "")
    return {normalize_email(e) for e in raw.split(",") if e.strip()}


async def get_admin_user(user: dict = Depends(get_current_user)) -> dict:
    if normalize_email(user.get("email") or "") not in _admin_emails():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
