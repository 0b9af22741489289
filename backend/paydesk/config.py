"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "Paydesk UPI Collection API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'payments.db'}"
    DB_BUSY_TIMEOUT_SECONDS: float = 15.0

    # --- Payee (transfer target) ---
    ADMIN_UPI_ID: str = "9511648488@ybl"
    ADMIN_NAME: str = "Abhay Rathod"
    PAYMENT_CURRENCY: str = "INR"

    # --- Admin credentials ---
    ADMIN_USERNAME: str = "Abhay"
    ADMIN_PASSWORD: str = "Abhay123"
    SECRET_KEY: str = "paydesk-secret-key-change-in-production"
    CORS_ORIGINS: list[str] = ["*"]

    # --- Payment rules ---
    MIN_PAYMENT_AMOUNT: float = 100
    TXN_PREFIX: str = "REC"
    TXN_ID_MAX_ATTEMPTS: int = 5
    TXN_TIMEZONE: str = "UTC"

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
