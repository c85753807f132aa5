"""Tests for password hashing and session-token primitives."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from core import (
    create_session_token,
    decode_token,
    hash_password,
    needs_rehash,
    verify_password,
)
from core.config import settings
from models import Role
from services.auth import issue_session_token
from services.errors import ErrorKind, SigningKeyMisconfigured

SECRET = "unit-test-session-signing-secret-0123456789"


def test_hash_is_salted_and_verifies() -> None:
    first = hash_password("p")
    second = hash_password("p")

    assert first != second
    assert verify_password("p", first)
    assert verify_password("p", second)
    assert not verify_password("q", first)
    assert not needs_rehash(first)


@pytest.mark.parametrize("stored", [None, "", "not-a-hash", "$pbkdf2-sha256$broken"])
def test_verify_never_raises_on_malformed_hashes(stored: str | None) -> None:
    assert verify_password("p", stored) is False


def test_issued_token_binds_account_and_role() -> None:
    token = issue_session_token(
        "account-1",
        Role.USER,
        SECRET,
        expires_delta=timedelta(minutes=5),
    )

    claims = decode_token(token, secret=SECRET)
    assert claims["sub"] == "account-1"
    assert claims["role"] == "user"
    assert claims["exp"] > claims["iat"]


def test_token_without_ttl_has_no_expiry() -> None:
    token = issue_session_token("account-1", Role.USER, SECRET)

    assert "exp" not in decode_token(token, secret=SECRET)


def test_decode_rejects_foreign_secret_and_expired_tokens() -> None:
    token = create_session_token("account-1", "user", secret=SECRET)
    expired = create_session_token(
        "account-1",
        "user",
        secret=SECRET,
        expires_delta=timedelta(seconds=-1),
    )

    with pytest.raises(ValueError):
        decode_token(token, secret=SECRET + "-other")
    with pytest.raises(ValueError):
        decode_token(expired, secret=SECRET)


def test_decode_rejects_tokens_of_other_types() -> None:
    foreign = jwt.encode(
        {"sub": "account-1", "iat": 0, "type": "refresh"},
        SECRET,
        algorithm="HS256",
    )

    with pytest.raises(ValueError):
        decode_token(foreign, secret=SECRET)


def test_issue_without_secret_is_an_upstream_failure() -> None:
    with pytest.raises(SigningKeyMisconfigured) as exc_info:
        issue_session_token("account-1", Role.USER, "")

    assert exc_info.value.kind is ErrorKind.UPSTREAM
    assert exc_info.value.retryable


def test_issue_with_unsupported_algorithm_is_an_upstream_failure() -> None:
    with pytest.raises(SigningKeyMisconfigured):
        issue_session_token("account-1", Role.USER, SECRET, algorithm="NOPE")


def test_default_secret_round_trip_uses_settings() -> None:
    token = create_session_token("account-2", "admin")

    assert decode_token(token)["sub"] == "account-2"
    with pytest.raises(ValueError):
        decode_token(token, secret=settings.session_secret + "-rotated")
