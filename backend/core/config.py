"""Application settings loaded from the environment."""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_env: str = "local"
    log_level: str = "INFO"
    database_url: str = "sqlite+aiosqlite:///./app.db"
    database_echo: bool = False
    database_create_tables: bool = True

    session_secret: str = "change-me"
    session_algorithm: str = "HS256"
    # 0 issues tokens without an ``exp`` claim.
    session_token_expire_minutes: int = 60 * 24 * 7

    # 0 means unbounded per-subscriber channels.
    event_channel_capacity: int = 256
    subscription_heartbeat_seconds: float = 15.0


settings = Settings()
