"""Core configuration and security helpers."""

from .config import Settings, settings
from .logging import configure_logging
from .security import (
    SESSION_TOKEN_TYPE,
    create_session_token,
    decode_token,
    hash_password,
    needs_rehash,
    session_token_ttl,
    verify_password,
)

__all__ = [
    "Settings",
    "settings",
    "configure_logging",
    "SESSION_TOKEN_TYPE",
    "create_session_token",
    "decode_token",
    "hash_password",
    "needs_rehash",
    "session_token_ttl",
    "verify_password",
]
