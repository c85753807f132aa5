"""Password hashing and session-token signing primitives."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from .config import settings

SESSION_TOKEN_TYPE = "session"

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    """Return True when ``password`` matches ``password_hash``.

    Unknown or malformed stored hashes never raise; they simply do not match.
    """
    if not password_hash:
        return False
    try:
        return _pwd_context.verify(password, password_hash)
    except (ValueError, TypeError):
        return False


def needs_rehash(password_hash: str) -> bool:
    try:
        return _pwd_context.needs_update(password_hash)
    except (ValueError, TypeError):
        return False


def session_token_ttl() -> timedelta | None:
    if settings.session_token_expire_minutes <= 0:
        return None
    return timedelta(minutes=settings.session_token_expire_minutes)


def create_session_token(
    subject: str,
    role: str,
    *,
    secret: str | None = None,
    algorithm: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": subject,
        "role": role,
        "type": SESSION_TOKEN_TYPE,
        "iat": int(now.timestamp()),
    }
    if expires_delta is not None:
        payload["exp"] = int((now + expires_delta).timestamp())
    return jwt.encode(
        payload,
        secret or settings.session_secret,
        algorithm=algorithm or settings.session_algorithm,
    )


def decode_token(
    token: str,
    *,
    secret: str | None = None,
    algorithm: str | None = None,
) -> dict[str, Any]:
    """Decode and verify a session token, raising ValueError when invalid."""
    try:
        payload = jwt.decode(
            token,
            secret or settings.session_secret,
            algorithms=[algorithm or settings.session_algorithm],
            options={"require": ["sub", "iat"]},
        )
    except jwt.PyJWTError as exc:
        raise ValueError("Invalid session token") from exc

    if payload.get("type") != SESSION_TOKEN_TYPE:
        raise ValueError("Unexpected token type")
    return payload
