"""Live account-event broadcasting."""

from .broadcaster import EventBroadcaster, NotificationEvent, Subscription
from .filters import MATCH_ALL, AccountIdFilter, EventFilter, MatchAll
from .sse import KEEPALIVE_FRAME, format_sse, stream_events
from .topics import ACCOUNT_CREATED, ACCOUNT_UPDATED, TOPICS

__all__ = [
    "ACCOUNT_CREATED",
    "ACCOUNT_UPDATED",
    "TOPICS",
    "AccountIdFilter",
    "EventBroadcaster",
    "EventFilter",
    "KEEPALIVE_FRAME",
    "MATCH_ALL",
    "MatchAll",
    "NotificationEvent",
    "Subscription",
    "format_sse",
    "stream_events",
]
