"""Sign-up and sign-in flows.

One email maps to at most one account: local sign-up rejects any email already
on file, and a social sign-in is rejected when its email belongs to an account
created outside that provider. The flows hold no locks; the store's atomic
find-or-create operations settle concurrent requests for the same key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from core import hash_password
from models import Account, Role, build_social_key
from services.accounts.profile import publish_account_event
from services.accounts.store import normalize_email
from services.errors import AlreadySignedUp, DuplicateAccount, EmailAlreadyClaimed, SignUpFailed
from services.events import ACCOUNT_CREATED

from .identity_resolution import resolve_login_account, social_email_claimed
from .schemas import SignInRequest, SignUpRequest, SocialProfile, SocialProvider
from .tokens import issue_session_token

if TYPE_CHECKING:
    from services.context import RequestContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignInResult:
    token: str
    account: Account


def _issue_token(context: RequestContext, account: Account) -> str:
    return issue_session_token(
        account.id,
        Role.USER,
        context.session_secret,
        algorithm=context.session_algorithm,
        expires_delta=context.session_ttl,
    )


async def sign_up(context: RequestContext, payload: SignUpRequest) -> SignInResult:
    email = normalize_email(str(payload.email))
    # Known emails are rejected before paying for the hash.
    if await context.store.find_by_email(email) is not None:
        raise AlreadySignedUp()
    fields = {
        **payload.profile_values(),
        "email": email,
        "password_hash": hash_password(payload.password),
        "verified": bool(email),
    }
    try:
        account, created = await context.store.find_or_create_by_email(fields)
    except DuplicateAccount as exc:
        raise AlreadySignedUp() from exc
    if not created:
        raise AlreadySignedUp()

    token = _issue_token(context, account)
    logger.info("Account signed up", extra={"account_id": account.id})
    publish_account_event(context, ACCOUNT_CREATED, account)
    return SignInResult(token=token, account=account)


async def sign_in_local(context: RequestContext, payload: SignInRequest) -> SignInResult:
    account = await resolve_login_account(
        context.store,
        email=str(payload.email),
        password=payload.password,
    )
    return SignInResult(token=_issue_token(context, account), account=account)


async def sign_in_social(
    context: RequestContext,
    provider: SocialProvider,
    profile: SocialProfile,
) -> SignInResult:
    email = normalize_email(str(profile.email)) if profile.email else None
    if await social_email_claimed(context.store, email=email, provider=provider):
        raise EmailAlreadyClaimed()

    social_key = build_social_key(provider.value, profile.social)
    defaults = {
        **profile.profile_values(),
        "email": email,
        "verified": bool(email),
    }
    try:
        account, created = await context.store.find_or_create_by_social_key(
            social_key,
            defaults,
        )
    except DuplicateAccount as exc:
        raise EmailAlreadyClaimed() from exc
    if account is None:
        raise SignUpFailed()

    logger.info(
        "Social sign-in",
        extra={"account_id": account.id, "provider": provider.value, "created": created},
    )
    return SignInResult(token=_issue_token(context, account), account=account)
