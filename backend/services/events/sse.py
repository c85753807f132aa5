"""Server-sent event framing for subscriptions."""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator

from .broadcaster import NotificationEvent, Subscription

KEEPALIVE_FRAME = ": keep-alive\n\n"


def format_sse(event: NotificationEvent) -> str:
    data = json.dumps(dict(event.body), separators=(",", ":"), default=str)
    return f"event: {event.topic}\ndata: {data}\n\n"


async def stream_events(
    subscription: Subscription,
    *,
    heartbeat_seconds: float,
) -> AsyncIterator[str]:
    """Yield SSE frames until the subscription ends or the client goes away."""
    try:
        while True:
            try:
                event = await asyncio.wait_for(subscription.get(), timeout=heartbeat_seconds)
            except asyncio.TimeoutError:
                yield KEEPALIVE_FRAME
                continue
            if event is None:
                break
            yield format_sse(event)
    finally:
        subscription.cancel()
