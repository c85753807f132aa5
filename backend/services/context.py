"""Request-scoped dependencies handed to every orchestrator call."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from models import Account
from services.accounts.store import AccountStore
from services.events import EventBroadcaster

CurrentUserResolver = Callable[[], Awaitable["Account | None"]]


async def _anonymous() -> Account | None:
    return None


@dataclass(frozen=True, slots=True)
class RequestContext:
    store: AccountStore
    broadcaster: EventBroadcaster
    session_secret: str
    session_algorithm: str = "HS256"
    session_ttl: timedelta | None = None
    get_current_user: CurrentUserResolver = _anonymous
