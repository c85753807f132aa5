"""Live account-event streams over server-sent events."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from api.deps import get_broadcaster
from core import settings
from services.events import (
    ACCOUNT_CREATED,
    ACCOUNT_UPDATED,
    AccountIdFilter,
    EventBroadcaster,
    Subscription,
    stream_events,
)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


def _event_stream_response(subscription: Subscription) -> StreamingResponse:
    return StreamingResponse(
        stream_events(
            subscription,
            heartbeat_seconds=settings.subscription_heartbeat_seconds,
        ),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
        background=BackgroundTask(subscription.cancel),
    )


@router.get("/account-created")
async def subscribe_account_created(
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> StreamingResponse:
    """Stream every account created from now on."""
    return _event_stream_response(broadcaster.subscribe(ACCOUNT_CREATED))


@router.get("/account-updated/{account_id}")
async def subscribe_account_updated(
    account_id: str,
    broadcaster: EventBroadcaster = Depends(get_broadcaster),
) -> StreamingResponse:
    """Stream profile updates of one account only."""
    subscription = broadcaster.subscribe(ACCOUNT_UPDATED, AccountIdFilter(account_id))
    return _event_stream_response(subscription)
