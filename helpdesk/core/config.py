# helpdesk/core/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    DATABASE_URL: str = Field(default="sqlite:///./helpdesk.db")
    DB_POOL_SIZE: int = 5
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a pooled connection
    DB_POOL_PRE_PING: bool = True

    APP_NAME: str = "Helpdesk API"
    APP_DESC: str = "Support ticket submission and triage"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # CORS origins, comma separated
    CORS_ORIGINS: str | None = None

    # Ticket rules
    MIN_TEXT_LENGTH: int = Field(default=8, ge=1)
    MAX_SUMMARY_LENGTH: int = 100
    MAX_DESCRIPTION_LENGTH: int = 1000
    OPEN_STATUS_NAME: str = "Open"
    ADMIN_ROLE_NAME: str = "Admin"

    # Passwords and access tokens
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    AUTO_CREATE_SCHEMA: bool = True
    SEED_REFERENCE_DATA: bool = False

    # Pydantic v2 style config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        if not self.CORS_ORIGINS:
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
