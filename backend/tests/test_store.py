"""Tests for the account store adapter."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from db.errors import is_unique_violation, unique_violation_columns
from models import Account
from services.accounts import AccountStore
from services.errors import DuplicateAccount, StoreUnavailable


@pytest.mark.asyncio
async def test_create_normalizes_email_and_loads_timestamps(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)

    account = await store.create({"email": " Mixed@Example.COM ", "verified": True})

    assert account.email == "mixed@example.com"
    assert account.created_at is not None
    assert (await store.find_by_email("MIXED@example.com")).id == account.id


@pytest.mark.asyncio
async def test_create_reports_duplicate_email(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)
    await store.create({"email": "dup@example.com"})

    with pytest.raises(DuplicateAccount) as exc_info:
        await store.create({"email": "dup@example.com"})

    assert exc_info.value.field == "email"


@pytest.mark.asyncio
async def test_find_or_create_by_email_reports_existing_row(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)

    first, first_created = await store.find_or_create_by_email({"email": "once@example.com"})
    second, second_created = await store.find_or_create_by_email({"email": "ONCE@example.com"})

    assert first_created is True
    assert second_created is False
    assert second.id == first.id


@pytest.mark.asyncio
async def test_concurrent_social_find_or_create_has_single_winner(
    session_maker: async_sessionmaker[AsyncSession],
) -> None:
    async def attempt() -> tuple[str | None, bool]:
        async with session_maker() as session:
            account, created = await AccountStore(session).find_or_create_by_social_key(
                "google_g1",
                {"name": "Gina"},
            )
            return (account.id if account else None), created

    results = await asyncio.gather(*(attempt() for _ in range(4)))

    assert len({account_id for account_id, _ in results}) == 1
    assert None not in {account_id for account_id, _ in results}
    assert sum(1 for _, created in results if created) == 1


@pytest.mark.asyncio
async def test_social_find_or_create_raises_when_email_is_taken(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)
    await store.create({"email": "taken@example.com", "social": "google_a"})

    with pytest.raises(DuplicateAccount) as exc_info:
        await store.find_or_create_by_social_key("google_b", {"email": "taken@example.com"})

    assert exc_info.value.field == "email"
    assert await store.find_by_social_key("google_b") is None


@pytest.mark.asyncio
async def test_find_by_email_excluding_provider(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)
    google = await store.create({"email": "g@example.com", "social": "google_1"})
    local = await store.create({"email": "l@example.com", "password_hash": "x"})
    # "_" must be matched literally, not as a LIKE wildcard.
    lookalike = await store.create({"email": "w@example.com", "social": "googleX1"})

    assert await store.find_by_email("g@example.com", excluding_provider="google") is None
    assert (await store.find_by_email("g@example.com", excluding_provider="facebook")).id == google.id
    assert (await store.find_by_email("l@example.com", excluding_provider="google")).id == local.id
    assert (await store.find_by_email("w@example.com", excluding_provider="google")).id == lookalike.id


@pytest.mark.asyncio
async def test_soft_deleted_accounts_are_invisible_and_release_email(
    db_session: AsyncSession,
) -> None:
    store = AccountStore(db_session)
    old = await store.create({"email": "gone@example.com", "social": "facebook_9"})
    old.deleted_at = datetime.now(timezone.utc)
    db_session.add(old)
    await db_session.commit()

    assert await store.find_by_id(old.id) is None
    assert await store.find_by_social_key("facebook_9") is None
    assert await store.find_by_email("gone@example.com") is None

    replacement, created = await store.find_or_create_by_email({"email": "gone@example.com"})
    assert created is True
    assert replacement.id != old.id


@pytest.mark.asyncio
async def test_update_applies_only_given_fields(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)
    account = await store.create({"email": "p@example.com", "name": "Old", "nickname": "keep"})

    await store.update(account.id, {"name": "New"})
    refreshed = await store.find_by_id(account.id)

    assert refreshed is not None
    assert refreshed.name == "New"
    assert refreshed.nickname == "keep"


@pytest.mark.asyncio
async def test_update_rejects_non_profile_fields(db_session: AsyncSession) -> None:
    store = AccountStore(db_session)
    account = await store.create({"email": "strict@example.com"})

    with pytest.raises(ValueError):
        await store.update(account.id, {"email": "other@example.com"})


@pytest.mark.asyncio
async def test_database_failures_surface_as_store_unavailable() -> None:
    class BrokenSession:
        async def execute(self, *args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    store = AccountStore(BrokenSession())  # type: ignore[arg-type]

    with pytest.raises(StoreUnavailable) as exc_info:
        await store.find_by_id("anything")

    assert exc_info.value.retryable


def test_unique_violation_columns_parses_sqlite_and_postgres_messages() -> None:
    sqlite_error = IntegrityError(
        "INSERT", {}, Exception("UNIQUE constraint failed: accounts.email")
    )
    postgres_error = IntegrityError(
        "INSERT",
        {},
        Exception('duplicate key value violates unique constraint "uq" DETAIL: Key (social)=(google_1) already exists.'),
    )
    other_error = IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed: accounts.id"))

    assert is_unique_violation(sqlite_error)
    assert unique_violation_columns(sqlite_error) == frozenset({"email"})
    assert unique_violation_columns(postgres_error) == frozenset({"social"})
    assert not is_unique_violation(other_error)
    assert unique_violation_columns(other_error) == frozenset()


def test_account_defaults() -> None:
    account = Account(email="defaults@example.com")

    assert account.id
    assert account.verified is False
    assert account.password_hash is None
