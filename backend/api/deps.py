"""Shared FastAPI dependencies."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core import session_token_ttl, settings
from db import get_session
from models import Account
from services.accounts import AccountStore
from services.auth import resolve_session_account
from services.context import RequestContext
from services.errors import NotSignedIn
from services.events import EventBroadcaster


async def get_db() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


def get_broadcaster(request: Request) -> EventBroadcaster:
    return request.app.state.broadcaster


def get_account_store(session: AsyncSession = Depends(get_db)) -> AccountStore:
    return AccountStore(session)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Accept ``Bearer <token>`` as well as a bare token value."""
    if not authorization:
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if not value:
        return scheme or None
    if scheme.lower() != "bearer":
        return None
    token = value.strip()
    return token or None


def get_request_context(
    request: Request,
    store: AccountStore = Depends(get_account_store),
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> RequestContext:
    token = extract_bearer_token(request.headers.get("authorization"))

    async def current_user() -> Account | None:
        if token is None:
            return None
        return await resolve_session_account(
            store,
            token,
            secret=settings.session_secret,
            algorithm=settings.session_algorithm,
        )

    return RequestContext(
        store=store,
        broadcaster=broadcaster,
        session_secret=settings.session_secret,
        session_algorithm=settings.session_algorithm,
        session_ttl=session_token_ttl(),
        get_current_user=current_user,
    )


async def get_optional_current_user(
    context: RequestContext = Depends(get_request_context),
) -> Account | None:
    return await context.get_current_user()


async def get_current_user(
    account: Account | None = Depends(get_optional_current_user),
) -> Account:
    if account is None:
        raise NotSignedIn()
    return account
