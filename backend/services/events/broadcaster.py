"""In-process publish/subscribe hub for live account events."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .filters import MATCH_ALL, EventFilter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotificationEvent:
    topic: str
    body: Mapping[str, Any]


class Subscription:
    """A filtered, cancellable stream of events for one topic.

    Events arrive in publish order. A bounded channel reserves one extra slot
    so the end-of-stream marker always fits.
    """

    def __init__(
        self,
        broadcaster: EventBroadcaster,
        topic: str,
        event_filter: EventFilter,
        *,
        capacity: int = 0,
    ) -> None:
        self.topic = topic
        self.event_filter = event_filter
        self._broadcaster = broadcaster
        self._capacity = max(capacity, 0)
        self._queue: asyncio.Queue[NotificationEvent | None] = asyncio.Queue(
            maxsize=self._capacity + 1 if self._capacity else 0
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def offer(self, event: NotificationEvent) -> bool:
        """Enqueue without blocking; False when closed or the channel is full."""
        if self._closed:
            return False
        if self._capacity and self._queue.qsize() >= self._capacity:
            return False
        self._queue.put_nowait(event)
        return True

    def _finish(self, *, discard_pending: bool) -> None:
        if self._closed:
            return
        self._closed = True
        self._broadcaster.unregister(self)
        if discard_pending:
            while not self._queue.empty():
                self._queue.get_nowait()
        self._queue.put_nowait(None)

    def cancel(self) -> None:
        """Stop deliveries immediately; safe to call more than once."""
        self._finish(discard_pending=True)

    def terminate(self) -> None:
        """End the stream after the events already queued."""
        self._finish(discard_pending=False)

    async def get(self) -> NotificationEvent | None:
        """Wait for the next event; None once the subscription has ended."""
        if self._closed and self._queue.empty():
            return None
        return await self._queue.get()

    def __aiter__(self) -> Subscription:
        return self

    async def __anext__(self) -> NotificationEvent:
        event = await self.get()
        if event is None:
            raise StopAsyncIteration
        return event

    async def __aenter__(self) -> Subscription:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.cancel()


class EventBroadcaster:
    """Fan events out to every live subscriber of a topic.

    Publishing never blocks: each subscriber has its own channel and a
    subscriber whose channel is full is dropped. Nothing is persisted, so a
    subscriber only sees events published while it is registered.
    """

    def __init__(self, *, channel_capacity: int = 0) -> None:
        self._channel_capacity = channel_capacity
        self._subscriptions: dict[str, dict[Subscription, None]] = {}
        self._closed = False

    def subscribe(
        self,
        topic: str,
        event_filter: EventFilter | None = None,
    ) -> Subscription:
        if self._closed:
            raise RuntimeError("Event broadcaster is closed")
        subscription = Subscription(
            self,
            topic,
            event_filter or MATCH_ALL,
            capacity=self._channel_capacity,
        )
        self._subscriptions.setdefault(topic, {})[subscription] = None
        logger.debug(
            "Subscription registered",
            extra={"topic": topic, **subscription.event_filter.describe()},
        )
        return subscription

    def unregister(self, subscription: Subscription) -> None:
        subscribers = self._subscriptions.get(subscription.topic)
        if subscribers is None:
            return
        subscribers.pop(subscription, None)
        if not subscribers:
            del self._subscriptions[subscription.topic]

    def publish(self, topic: str, body: Mapping[str, Any]) -> int:
        """Deliver ``body`` to matching subscribers; return how many got it."""
        event = NotificationEvent(topic=topic, body=body)
        delivered = 0
        for subscription in list(self._subscriptions.get(topic, ())):
            try:
                if not subscription.event_filter.matches(body):
                    continue
            except Exception as filter_error:
                logger.warning(
                    "Subscription filter raised; skipping subscriber",
                    extra={"topic": topic, **subscription.event_filter.describe()},
                    exc_info=filter_error,
                )
                continue
            if subscription.offer(event):
                delivered += 1
                continue
            if not subscription.closed:
                logger.warning(
                    "Dropping slow subscriber with a full channel",
                    extra={"topic": topic, "capacity": self._channel_capacity},
                )
                subscription.terminate()
        return delivered

    def subscriber_count(self, topic: str | None = None) -> int:
        if topic is not None:
            return len(self._subscriptions.get(topic, ()))
        return sum(len(subscribers) for subscribers in self._subscriptions.values())

    def close(self) -> None:
        self._closed = True
        for subscribers in list(self._subscriptions.values()):
            for subscription in list(subscribers):
                subscription.cancel()
        self._subscriptions.clear()
