"""Async engine and session factory."""

from __future__ import annotations

from collections.abc import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from core import settings


def build_engine(database_url: str | None = None) -> AsyncEngine:
    url = database_url or settings.database_url
    connect_args: dict[str, object] = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_async_engine(
        url,
        echo=settings.database_echo,
        connect_args=connect_args,
    )


async_engine = build_engine()
async_session_maker = async_sessionmaker(async_engine, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    async with async_session_maker() as session:
        yield session


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create missing tables from the SQLModel metadata.

    Startup table creation is a development convenience; it does not alter
    existing tables and is not a migration tool.
    """
    # Registers the table models on the metadata.
    import models  # noqa: F401

    async with (engine or async_engine).begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)
