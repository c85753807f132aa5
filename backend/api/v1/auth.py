"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from api.deps import get_request_context
from services.accounts import AccountPublic
from services.auth import (
    AuthPayload,
    SignInRequest,
    SignInResult,
    SignUpRequest,
    SocialProfile,
    SocialProvider,
    sign_in_local,
    sign_in_social,
    sign_up,
)
from services.context import RequestContext

router = APIRouter(prefix="/auth", tags=["auth"])


def _auth_payload(result: SignInResult) -> AuthPayload:
    return AuthPayload(
        token=result.token,
        account=AccountPublic.model_validate(result.account),
    )


@router.post("/sign-up", status_code=status.HTTP_201_CREATED, response_model=AuthPayload)
async def sign_up_account(
    payload: SignUpRequest,
    context: RequestContext = Depends(get_request_context),
) -> AuthPayload:
    return _auth_payload(await sign_up(context, payload))


@router.post("/sign-in", response_model=AuthPayload)
async def sign_in_account(
    payload: SignInRequest,
    context: RequestContext = Depends(get_request_context),
) -> AuthPayload:
    return _auth_payload(await sign_in_local(context, payload))


@router.post("/social/{provider}", response_model=AuthPayload)
async def sign_in_with_provider(
    provider: SocialProvider,
    profile: SocialProfile,
    context: RequestContext = Depends(get_request_context),
) -> AuthPayload:
    """Sign in with a provider profile, creating the account on first use."""
    return _auth_payload(await sign_in_social(context, provider, profile))
