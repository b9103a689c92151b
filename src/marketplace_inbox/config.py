from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MARKETPLACE_API_URL: str = "http://localhost:5000"
    HTTP_TIMEOUT_SECONDS: float = 10.0

    SESSION_COOKIE_NAME: str = "connect.sid"

    CACHE_BACKEND: Literal["memory", "redis"] = "memory"
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_PREFIX: str = "inbox"
    CACHE_TTL_SECONDS: int = 300

    NOTIFICATION_POLL_SECONDS: int = 60

    BUSINESS_NAME_PLACEHOLDER: str = "Business"
    BUSINESS_LOOKUP_TIMEOUT_SECONDS: float = 2.0

    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    # Session used by the standalone badge watcher script.
    WATCH_SESSION_COOKIE: str = ""

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
