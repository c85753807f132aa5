"""Authentication domain services."""

from .identity_resolution import resolve_login_account, social_email_claimed
from .schemas import (
    AuthPayload,
    SignInRequest,
    SignUpRequest,
    SocialProfile,
    SocialProvider,
)
from .sign_in import SignInResult, sign_in_local, sign_in_social, sign_up
from .tokens import issue_session_token, resolve_session_account

__all__ = [
    "AuthPayload",
    "SignInRequest",
    "SignInResult",
    "SignUpRequest",
    "SocialProfile",
    "SocialProvider",
    "issue_session_token",
    "resolve_login_account",
    "resolve_session_account",
    "sign_in_local",
    "sign_in_social",
    "sign_up",
    "social_email_claimed",
]
