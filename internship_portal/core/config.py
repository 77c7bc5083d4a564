"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Persistence (any SQLAlchemy URL; SQLite by default)
    database_url: str = "sqlite:///./placement.db"
    database_echo: bool = False
    persistence_enabled: bool = True

    # MongoDB (notification inbox when notification_backend = "mongo")
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_docs"
    notification_backend: str = "memory"

    # Placement rules
    max_active_applications: int = 3
    max_internships_per_rep: int = 5
    max_slots_per_internship: int = 10
    basic_only_max_year: int = 2

    # Turning a pending internship visible approves it
    visibility_auto_approve: bool = True

    # App
    log_level: str = "INFO"
    debug: bool = False

    @property
    def is_sqlite(self) -> bool:
        """SQLite engines take no connection pool arguments"""
        return self.database_url.startswith("sqlite")

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
