# libs/mongo_session/settings.py
from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SESSION_", env_file=".env", extra="ignore")

    # MongoDB
    MONGO_URI: str = "mongodb://127.0.0.1:27017"
    MONGO_DB: str = "sessions"
    CONNECT_TIMEOUT_MS: int = Field(default=5000)

    # Collections
    COL_SESSIONS: str = "session"

    # Seconds the TTL monitor waits past expired_at before removing a record
    TTL_GRACE_SECONDS: int = Field(default=1)

    # Idle MongoStore objects kept for reuse
    POOL_MAX_SIZE: int = Field(default=1024)

    LOG_LEVEL: str = Field(default="INFO")


settings = Settings()
