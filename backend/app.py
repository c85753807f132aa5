"""FastAPI application factory."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.errors import register_error_handlers
from api.v1 import api_router
from core import configure_logging, settings
from db import async_engine, create_tables
from services.events import EventBroadcaster

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.database_create_tables:
        await create_tables()
    if settings.session_secret == "change-me" and settings.app_env != "local":
        logger.warning(
            "SESSION_SECRET still has its placeholder value",
            extra={"app_env": settings.app_env},
        )
    logger.info("Application started", extra={"app_env": settings.app_env})
    try:
        yield
    finally:
        app.state.broadcaster.close()
        await async_engine.dispose()


def create_app(*, broadcaster: EventBroadcaster | None = None) -> FastAPI:
    configure_logging(settings.log_level)
    application = FastAPI(title="Identity API", lifespan=lifespan)
    application.state.broadcaster = broadcaster or EventBroadcaster(
        channel_capacity=settings.event_channel_capacity,
    )
    register_error_handlers(application)
    application.include_router(api_router, prefix="/api/v1")

    @application.get("/health", tags=["health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return application
