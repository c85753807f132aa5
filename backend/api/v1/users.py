"""Account profile endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from api.deps import get_account_store, get_current_user, get_request_context
from models import Account
from services.accounts import AccountPublic, AccountStore, ProfilePatch, update_profile
from services.context import RequestContext
from services.errors import AccountNotFound

from .pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, trim_page

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=list[AccountPublic])
async def list_users(
    response: Response,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
    offset: Annotated[int, Query(ge=0)] = 0,
    current_user: Account = Depends(get_current_user),
    store: AccountStore = Depends(get_account_store),
) -> list[AccountPublic]:
    """Return accounts in creation order; signed-in callers only."""
    accounts = await store.list_accounts(limit=limit + 1, offset=offset)
    page = trim_page(accounts, response, offset=offset, limit=limit)
    return [AccountPublic.model_validate(account) for account in page]


@router.get("/me", response_model=AccountPublic)
async def read_current_user(
    current_user: Account = Depends(get_current_user),
) -> AccountPublic:
    return AccountPublic.model_validate(current_user)


@router.get("/{account_id}", response_model=AccountPublic)
async def read_user(
    account_id: str,
    store: AccountStore = Depends(get_account_store),
) -> AccountPublic:
    account = await store.find_by_id(account_id)
    if account is None:
        raise AccountNotFound()
    return AccountPublic.model_validate(account)


@router.patch("/{account_id}", response_model=AccountPublic)
async def update_user_profile(
    account_id: str,
    patch: ProfilePatch,
    context: RequestContext = Depends(get_request_context),
) -> AccountPublic:
    account = await update_profile(context, account_id, patch)
    return AccountPublic.model_validate(account)
