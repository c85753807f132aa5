"""Sign-in and sign-up payload schemas."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, EmailStr, Field

from services.accounts.schemas import MAX_PROFILE_NAME_LENGTH, AccountPublic


class SocialProvider(str, Enum):
    GOOGLE = "google"
    FACEBOOK = "facebook"


class ProfileFields(BaseModel):
    name: str | None = Field(default=None, max_length=MAX_PROFILE_NAME_LENGTH)
    nickname: str | None = Field(default=None, max_length=MAX_PROFILE_NAME_LENGTH)
    photo: str | None = Field(default=None, max_length=2048)
    birthday: date | None = None
    gender: str | None = Field(default=None, max_length=20)
    phone: str | None = Field(default=None, max_length=32)

    def profile_values(self) -> dict[str, Any]:
        return self.model_dump(include=set(ProfileFields.model_fields))


class SignUpRequest(ProfileFields):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class SocialProfile(ProfileFields):
    """Profile reported by the client after authenticating with a provider."""

    social: str = Field(min_length=1, max_length=128)
    email: EmailStr | None = None


class AuthPayload(BaseModel):
    token: str
    account: AccountPublic
