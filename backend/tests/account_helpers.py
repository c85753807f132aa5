"""Shared request helpers for API tests."""

from __future__ import annotations

from typing import Any
from uuid import uuid4

from httpx import AsyncClient


def build_sign_up_payload(prefix: str = "alice") -> dict[str, str]:
    suffix = uuid4().hex[:8]
    return {
        "email": f"{prefix}_{suffix}@example.com",
        "password": "Sup3rSecret!",
        "name": prefix.title(),
    }


def build_social_profile(native_id: str, **fields: Any) -> dict[str, Any]:
    return {"social": native_id, **fields}


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


async def sign_up(async_client: AsyncClient, payload: dict[str, str]) -> dict[str, Any]:
    response = await async_client.post("/api/v1/auth/sign-up", json=payload)
    assert response.status_code == 201, response.text
    return response.json()
