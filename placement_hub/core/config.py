"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from typing import List
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_hub"

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 1440
    bcrypt_rounds: int = 12

    # Registration: students must use the institutional domain,
    # recruiters and admins must not
    institutional_email_domain: str = "g.bracu.ac.bd"

    # Forum: admins may delete any post or comment
    admin_forum_moderation: bool = True

    # Dashboard
    dashboard_recent_limit: int = 5

    # App
    cors_origins: str = "*"
    log_level: str = "INFO"
    debug: bool = False

    @field_validator("institutional_email_domain")
    @classmethod
    def normalize_domain(cls, value: str) -> str:
        return value.strip().lower().lstrip("@")

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
