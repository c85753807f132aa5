"""Session-token issuing and bearer resolution."""

from __future__ import annotations

from datetime import timedelta

import jwt

from core import create_session_token, decode_token
from models import Account, Role
from services.accounts.store import AccountStore
from services.errors import SigningKeyMisconfigured


def issue_session_token(
    account_id: str,
    role: Role,
    secret: str,
    *,
    algorithm: str = "HS256",
    expires_delta: timedelta | None = None,
) -> str:
    if not secret:
        raise SigningKeyMisconfigured()
    try:
        return create_session_token(
            account_id,
            role.value,
            secret=secret,
            algorithm=algorithm,
            expires_delta=expires_delta,
        )
    except (jwt.PyJWTError, NotImplementedError) as exc:
        raise SigningKeyMisconfigured() from exc


async def resolve_session_account(
    store: AccountStore,
    token: str,
    *,
    secret: str,
    algorithm: str = "HS256",
) -> Account | None:
    """Return the account a bearer token belongs to, or None if it is unusable."""
    try:
        payload = decode_token(token, secret=secret, algorithm=algorithm)
    except ValueError:
        return None

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        return None
    return await store.find_by_id(subject.strip())
