"""
Application configuration.

All configuration is loaded from environment variables.
Never hardcode connection strings or business thresholds in code.
"""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv

# Load .env file into environment variables
load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "Shop Ledger"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"

    # Server
    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Database: the shop runs against a local embedded file by default
    DATABASE_URL: str = os.getenv(
        "DATABASE_URL",
        "sqlite:///./shop_ledger.db"
    )

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Ledger behaviour
    OVERDUE_DAYS: int = int(os.getenv("OVERDUE_DAYS", "30"))
    RECONCILE_ON_LOAD: bool = (
        os.getenv("RECONCILE_ON_LOAD", "true").lower() == "true"
    )
    NOTIFICATION_HISTORY: int = int(os.getenv("NOTIFICATION_HISTORY", "50"))


@lru_cache()
def get_settings() -> Settings:
    """
    Return cached settings instance.

    The Settings object is created once and reused for all
    subsequent calls.
    """
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Install a basic log format for the shop_ledger logger tree."""
    level = level or get_settings().LOG_LEVEL
    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger("shop_ledger").setLevel(level)
