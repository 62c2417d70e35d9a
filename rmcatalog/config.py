from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "Raw Materials Catalog"
    ENVIRONMENT: str = "local"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Catalog API
    # ==============================
    CATALOG_API_URL: str = "http://localhost:3000"
    CATALOG_API_TOKEN: Optional[str] = None
    CATALOG_API_TIMEOUT_SECONDS: float = 15.0

    # ==============================
    # Display
    # ==============================
    DISPLAY_TIMEZONE: str = "Asia/Kolkata"
    RAW_MATERIAL_NOT_FOUND_REDIRECT: bool = True

    # ==============================
    # Dashboard Sign-in
    # ==============================
    DASHBOARD_USERNAME: Optional[str] = None
    DASHBOARD_PASSWORD: Optional[str] = None
    DASHBOARD_PASSWORD_HASH: Optional[str] = None
    DASHBOARD_PASSWORD_SALT: Optional[str] = None
    DASHBOARD_PBKDF2_ROUNDS: int = 200_000
    DASHBOARD_SESSION_SECRET: Optional[str] = None
    DASHBOARD_SESSION_COOKIE: str = "rm_session"


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
