"""Account domain model."""

from __future__ import annotations

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import Boolean, Column, Date, DateTime, Index, String, func, text
from sqlmodel import Field, SQLModel

SOCIAL_KEY_SEPARATOR = "_"


def build_social_key(provider: str, native_id: str) -> str:
    return f"{provider}{SOCIAL_KEY_SEPARATOR}{native_id}"


class Account(SQLModel, table=True):
    """One user identity, created by local sign-up or first social sign-in."""

    __tablename__ = "accounts"
    __table_args__ = (
        # Soft-deleted rows release their email.
        Index(
            "uq_accounts_email_active",
            "email",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    id: str = Field(default_factory=lambda: str(uuid4()), sa_column=Column(String(36), primary_key=True))
    email: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    social: str | None = Field(
        default=None, sa_column=Column(String(191), unique=True, nullable=True)
    )
    password_hash: str | None = Field(
        default=None, sa_column=Column(String(255), nullable=True)
    )
    name: str | None = Field(
        default=None, sa_column=Column(String(80), nullable=True)
    )
    nickname: str | None = Field(
        default=None, sa_column=Column(String(80), nullable=True)
    )
    photo: str | None = Field(
        default=None, sa_column=Column(String(2048), nullable=True)
    )
    birthday: date | None = Field(
        default=None, sa_column=Column(Date, nullable=True)
    )
    gender: str | None = Field(
        default=None, sa_column=Column(String(20), nullable=True)
    )
    phone: str | None = Field(
        default=None, sa_column=Column(String(32), nullable=True)
    )
    verified: bool = Field(
        default=False,
        sa_column=Column(
            Boolean,
            nullable=False,
            server_default=text("false"),
        ),
    )
    created_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        ),
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        ),
    )
    deleted_at: datetime | None = Field(
        default=None, sa_column=Column(DateTime(timezone=True), nullable=True)
    )
