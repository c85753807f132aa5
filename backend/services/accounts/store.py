"""Account persistence adapter.

``AccountStore`` is the only component that writes account rows. Uniqueness of
email and social-key is enforced by the database; the find-or-create helpers
lean on those constraints instead of application locks, so concurrent callers
racing on the same key all observe the single winning row.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from typing import Any, cast

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement, Select

from db.errors import is_unique_violation, unique_violation_columns
from models import SOCIAL_KEY_SEPARATOR, Account
from services.errors import DuplicateAccount, StoreUnavailable

PROFILE_FIELDS = frozenset({"name", "nickname", "photo", "birthday", "gender", "phone"})
logger = logging.getLogger(__name__)


def _eq(column: Any, value: Any) -> ColumnElement[bool]:
    return cast(ColumnElement[bool], column == value)


def _asc(column: Any) -> Any:
    return cast(Any, column).asc()


def _is_active() -> ColumnElement[bool]:
    return cast(ColumnElement[bool], cast(Any, Account.deleted_at).is_(None))


def normalize_email(value: str) -> str:
    return value.strip().lower()


class AccountStore:
    """Async account repository bound to one request-scoped session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def _guard(self) -> AsyncIterator[None]:
        try:
            yield
        except IntegrityError:
            raise
        except SQLAlchemyError as exc:
            logger.warning("Account store operation failed", exc_info=exc)
            raise StoreUnavailable() from exc

    async def _first(self, stmt: Select[Any]) -> Account | None:
        async with self._guard():
            result = await self._session.execute(
                stmt.execution_options(populate_existing=True).limit(1)
            )
        return cast("Account | None", result.scalar_one_or_none())

    async def find_by_id(self, account_id: str) -> Account | None:
        return await self._first(
            select(Account).where(_eq(Account.id, account_id), _is_active())
        )

    async def find_by_email(
        self,
        email: str,
        *,
        excluding_provider: str | None = None,
    ) -> Account | None:
        """Find an account by email.

        With ``excluding_provider`` only accounts that are not linked to that
        provider match: local accounts and accounts of other providers.
        """
        conditions = [_eq(Account.email, normalize_email(email)), _is_active()]
        if excluding_provider is not None:
            social_column = cast(Any, Account.social)
            prefix = f"{excluding_provider}{SOCIAL_KEY_SEPARATOR}"
            conditions.append(
                cast(
                    ColumnElement[bool],
                    or_(
                        social_column.is_(None),
                        ~social_column.startswith(prefix, autoescape=True),
                    ),
                )
            )
        return await self._first(
            select(Account).where(*conditions).order_by(_asc(Account.created_at))
        )

    async def find_by_social_key(self, social_key: str) -> Account | None:
        return await self._first(
            select(Account).where(_eq(Account.social, social_key), _is_active())
        )

    async def list_accounts(self, *, limit: int, offset: int = 0) -> list[Account]:
        async with self._guard():
            result = await self._session.execute(
                select(Account)
                .where(_is_active())
                .order_by(_asc(Account.created_at), _asc(Account.id))
                .offset(offset)
                .limit(limit)
            )
        return list(result.scalars().all())

    async def create(self, fields: Mapping[str, Any]) -> Account:
        values = dict(fields)
        if values.get("email"):
            values["email"] = normalize_email(values["email"])
        else:
            values["email"] = None
        account = Account(**values)
        self._session.add(account)
        try:
            async with self._guard():
                await self._session.commit()
        except IntegrityError as exc:
            await self._session.rollback()
            if not is_unique_violation(exc):
                raise StoreUnavailable() from exc
            columns = unique_violation_columns(exc)
            field = "email" if "email" in columns else next(iter(sorted(columns)), "account")
            raise DuplicateAccount(field) from exc
        except StoreUnavailable:
            await self._session.rollback()
            raise
        async with self._guard():
            await self._session.refresh(account)
        return account

    async def find_or_create_by_email(
        self,
        fields: Mapping[str, Any],
    ) -> tuple[Account, bool]:
        """Insert a local account unless its email is already registered."""
        email = normalize_email(cast(str, fields["email"]))
        existing = await self.find_by_email(email)
        if existing is not None:
            return existing, False
        try:
            return await self.create({**fields, "email": email}), True
        except DuplicateAccount:
            winner = await self.find_by_email(email)
            if winner is None:
                raise
            return winner, False

    async def find_or_create_by_social_key(
        self,
        social_key: str,
        defaults: Mapping[str, Any],
    ) -> tuple[Account | None, bool]:
        """Return the account for ``social_key``, creating it on first use.

        Returns ``(None, False)`` when the insert lost a race yet no row can
        be found afterwards. Raises ``DuplicateAccount("email")`` when the
        seeded email belongs to another account.
        """
        existing = await self.find_by_social_key(social_key)
        if existing is not None:
            return existing, False
        try:
            return await self.create({**defaults, "social": social_key}), True
        except DuplicateAccount as exc:
            winner = await self.find_by_social_key(social_key)
            if winner is not None:
                return winner, False
            email = defaults.get("email")
            if exc.field == "email" or (email and await self.find_by_email(email) is not None):
                raise DuplicateAccount("email") from exc
            logger.error(
                "Social find-or-create returned no row",
                extra={"social_key": social_key},
            )
            return None, False

    async def update(self, account_id: str, patch: Mapping[str, Any]) -> None:
        unknown = set(patch) - PROFILE_FIELDS - {"password_hash"}
        if unknown:
            raise ValueError(f"Unsupported account fields: {sorted(unknown)}")
        if not patch:
            return
        try:
            async with self._guard():
                await self._session.execute(
                    update(Account)
                    .where(_eq(Account.id, account_id), _is_active())
                    .values(**dict(patch))
                )
                await self._session.commit()
        except (IntegrityError, StoreUnavailable) as exc:
            await self._session.rollback()
            if isinstance(exc, IntegrityError):
                raise StoreUnavailable() from exc
            raise
