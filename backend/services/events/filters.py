"""Per-subscriber event predicates.

Filters are plain values rather than closures so a subscription's filter can
be inspected, logged and compared for its whole lifetime.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class EventFilter(Protocol):
    def matches(self, body: Mapping[str, Any]) -> bool: ...

    def describe(self) -> dict[str, str]: ...


@dataclass(frozen=True, slots=True)
class MatchAll:
    def matches(self, body: Mapping[str, Any]) -> bool:
        return True

    def describe(self) -> dict[str, str]:
        return {"filter": "all"}


@dataclass(frozen=True, slots=True)
class AccountIdFilter:
    """Match account events whose ``account.id`` equals ``account_id``."""

    account_id: str

    def matches(self, body: Mapping[str, Any]) -> bool:
        account = body.get("account")
        if not isinstance(account, Mapping):
            return False
        return account.get("id") == self.account_id

    def describe(self) -> dict[str, str]:
        return {"filter": "account_id", "account_id": self.account_id}


MATCH_ALL = MatchAll()
