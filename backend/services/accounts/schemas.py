"""Account payload schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_PROFILE_NAME_LENGTH = 80


class AccountPublic(BaseModel):
    """Account as exposed to clients and subscribers; never carries the hash."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str | None = None
    social: str | None = None
    name: str | None = None
    nickname: str | None = None
    photo: str | None = None
    birthday: date | None = None
    gender: str | None = None
    phone: str | None = None
    verified: bool = False
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProfilePatch(BaseModel):
    """Partial profile update; only fields explicitly sent are applied."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=MAX_PROFILE_NAME_LENGTH)
    nickname: str | None = Field(default=None, max_length=MAX_PROFILE_NAME_LENGTH)
    photo: str | None = Field(default=None, max_length=2048)
    birthday: date | None = None
    gender: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=32)

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


def account_event_body(account: Any) -> dict[str, Any]:
    return {"account": AccountPublic.model_validate(account).model_dump(mode="json")}
