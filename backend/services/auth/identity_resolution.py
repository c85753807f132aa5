"""Credential checks for local and social identities."""

from __future__ import annotations

from core import hash_password, needs_rehash, verify_password
from models import Account
from services.accounts.store import AccountStore
from services.errors import AccountNotFound, InvalidCredentials

from .schemas import SocialProvider


async def resolve_login_account(
    store: AccountStore,
    *,
    email: str,
    password: str,
) -> Account:
    account = await store.find_by_email(email)
    if account is None:
        raise AccountNotFound()
    # Social-only accounts have no hash and never match.
    if not verify_password(password, account.password_hash):
        raise InvalidCredentials()

    if account.password_hash is not None and needs_rehash(account.password_hash):
        await store.update(account.id, {"password_hash": hash_password(password)})
    return account


async def social_email_claimed(
    store: AccountStore,
    *,
    email: str | None,
    provider: SocialProvider,
) -> bool:
    """True when ``email`` already belongs to an account outside ``provider``."""
    if not email:
        return False
    existing = await store.find_by_email(email, excluding_provider=provider.value)
    return existing is not None
