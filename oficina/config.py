# -*- coding: utf-8 -*-
"""
Oficina Manager Configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # App info
    APP_NAME: str = "Oficina Manager"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Subscription
    TRIAL_DAYS: int = 14

    # Budget -> car conversion defaults (days from today)
    DELIVERY_LEAD_DAYS: int = 7
    EXIT_LEAD_DAYS: int = 14

    # Notifications auto-dismiss
    NOTIFICATION_TTL_SECONDS: int = 5

    # UI preferences (the only persisted state)
    THEME_KEY: str = "oficina-theme"
    DEFAULT_THEME: str = "theme-dark"
    PREFERENCES_FILE: str = "preferences.json"

    # Default workshop name shown before the profile is edited
    DEFAULT_WORKSHOP_NAME: str = "Oficina Manager"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Paths
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
