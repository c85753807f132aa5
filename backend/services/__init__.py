"""Business logic services."""

from .errors import (
    AccountNotFound,
    AlreadySignedUp,
    EmailAlreadyClaimed,
    ErrorKind,
    Forbidden,
    InvalidCredentials,
    NotSignedIn,
    ServiceError,
    SignUpFailed,
    SigningKeyMisconfigured,
    StoreUnavailable,
)

__all__ = [
    "AccountNotFound",
    "AlreadySignedUp",
    "EmailAlreadyClaimed",
    "ErrorKind",
    "Forbidden",
    "InvalidCredentials",
    "NotSignedIn",
    "ServiceError",
    "SignUpFailed",
    "SigningKeyMisconfigured",
    "StoreUnavailable",
]
