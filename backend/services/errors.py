"""Tagged error taxonomy shared by the identity orchestrators."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    CONFLICT = "conflict"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM = "upstream"
    INVARIANT = "invariant"


class ServiceError(Exception):
    """Request-scoped failure carrying its taxonomy kind.

    Callers branch on ``kind`` (or ``retryable``), never on the message.
    """

    kind: ErrorKind = ErrorKind.INVARIANT
    code: str = "service_error"
    default_detail: str = "Request failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def retryable(self) -> bool:
        return self.kind is ErrorKind.UPSTREAM


class AlreadySignedUp(ServiceError):
    kind = ErrorKind.CONFLICT
    code = "already_signed_up"
    default_detail = "Email for current user is already signed in"


class EmailAlreadyClaimed(ServiceError):
    kind = ErrorKind.CONFLICT
    code = "email_already_claimed"
    default_detail = "Email for current user is already signed in"


class Forbidden(ServiceError):
    kind = ErrorKind.FORBIDDEN
    code = "forbidden"
    default_detail = "User can update his or her own profile"


class AccountNotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND
    code = "not_found"
    default_detail = "Account not found"


class InvalidCredentials(ServiceError):
    kind = ErrorKind.UNAUTHORIZED
    code = "invalid_credentials"
    default_detail = "Invalid credentials"


class NotSignedIn(ServiceError):
    kind = ErrorKind.UNAUTHORIZED
    code = "not_signed_in"
    default_detail = "User is not logged in"


class StoreUnavailable(ServiceError):
    kind = ErrorKind.UPSTREAM
    code = "store_unavailable"
    default_detail = "Account store is unavailable"


class SigningKeyMisconfigured(ServiceError):
    kind = ErrorKind.UPSTREAM
    code = "signing_key_misconfigured"
    default_detail = "Session signing key is not configured"


class SignUpFailed(ServiceError):
    kind = ErrorKind.INVARIANT
    code = "sign_up_failed"
    default_detail = "Failed to sign up."


class DuplicateAccount(Exception):
    """Raised by the store when a unique account key is already taken."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Account with that {field} already exists")


__all__ = [
    "ErrorKind",
    "ServiceError",
    "AlreadySignedUp",
    "EmailAlreadyClaimed",
    "Forbidden",
    "AccountNotFound",
    "InvalidCredentials",
    "NotSignedIn",
    "StoreUnavailable",
    "SigningKeyMisconfigured",
    "SignUpFailed",
    "DuplicateAccount",
]
