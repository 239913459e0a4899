import os
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # In-memory SQLite by default; state lives as long as the registry
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite://")
    DATABASE_ECHO: bool = False

    # Logical clock (block height) used when callers do not pass one
    GENESIS_BLOCK_HEIGHT: int = int(os.getenv("GENESIS_BLOCK_HEIGHT", "100"))

    # Redis settings
    REDIS_ENABLED: bool = False
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD")
    STATUS_CHANNEL: str = "device:status:events"
    STATUS_KEY_PREFIX: str = "device:status:"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # This allows extra fields without validation errors


settings = Settings()
