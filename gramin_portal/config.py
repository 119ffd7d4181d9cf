"""Application configuration using Pydantic Settings."""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """REST backend connection settings."""

    model_config = SettingsConfigDict(env_prefix="API_")

    base_url: str = "http://localhost:8080/api"
    timeout_seconds: float = 30.0


class StorageSettings(BaseSettings):
    """Client-side session storage settings."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    secret: str = "change-me-gramin-portal"


class PollingSettings(BaseSettings):
    """Fixed refresh intervals, in seconds."""

    model_config = SettingsConfigDict(env_prefix="POLL_")

    sessions_seconds: float = 30.0
    notifications_seconds: float = 60.0


class UISettings(BaseSettings):
    """NiceGUI front-end settings."""

    model_config = SettingsConfigDict(env_prefix="UI_")

    title: str = "Dhuripara Village"
    port: int = 3000
    language: str = "en"
    first_year: int = 2024


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    api: ApiSettings = ApiSettings()
    storage: StorageSettings = StorageSettings()
    polling: PollingSettings = PollingSettings()
    ui: UISettings = UISettings()


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for the portal process."""
    logging.basicConfig(
        level=getattr(logging, (level or settings.log_level).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
