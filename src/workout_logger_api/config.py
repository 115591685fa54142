"""Configuration settings for the workout logger API."""
import os
from typing import Optional


DEFAULT_NOTION_API_BASE_URL = "https://api.notion.com/v1"
DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_NOTION_TIMEOUT_SECONDS = 30.0

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")

# NOTION_TIMEOUT_SECONDS values that turn the timeout off
NO_TIMEOUT_VALUES = ("", "none", "off")


def _env(name: str) -> Optional[str]:
    # Empty strings count as unset
    value = os.getenv(name)
    return value or None


def _timeout_from_env() -> Optional[float]:
    raw = os.getenv("NOTION_TIMEOUT_SECONDS")
    if raw is None:
        return DEFAULT_NOTION_TIMEOUT_SECONDS
    if raw.strip().lower() in NO_TIMEOUT_VALUES:
        return None
    try:
        return float(raw)
    except ValueError:
        return DEFAULT_NOTION_TIMEOUT_SECONDS


class Settings:
    """Application settings, read from the process environment."""

    LOG_LEVEL: str = "INFO"

    # Notion
    NOTION_TOKEN: Optional[str] = None
    NOTION_DATABASE_ID_LOG: Optional[str] = None
    NOTION_DATABASE_ID_SETS: Optional[str] = None
    NOTION_API_BASE_URL: str = DEFAULT_NOTION_API_BASE_URL
    NOTION_VERSION: str = DEFAULT_NOTION_VERSION
    NOTION_TIMEOUT_SECONDS: Optional[float] = DEFAULT_NOTION_TIMEOUT_SECONDS  # None disables

    # Webhook auth
    WEBHOOK_SECRET: Optional[str] = None

    def __init__(self):
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.LOG_LEVEL = log_level if log_level in LOG_LEVELS else "INFO"

        # Notion
        self.NOTION_TOKEN = _env("NOTION_TOKEN")
        self.NOTION_DATABASE_ID_LOG = _env("NOTION_DATABASE_ID_LOG")
        self.NOTION_DATABASE_ID_SETS = _env("NOTION_DATABASE_ID_SETS")
        self.NOTION_API_BASE_URL = (
            _env("NOTION_API_BASE_URL") or DEFAULT_NOTION_API_BASE_URL
        ).rstrip("/")
        self.NOTION_VERSION = _env("NOTION_VERSION") or DEFAULT_NOTION_VERSION
        self.NOTION_TIMEOUT_SECONDS = _timeout_from_env()

        # Webhook auth
        self.WEBHOOK_SECRET = _env("WEBHOOK_SECRET")

    @property
    def is_notion_configured(self) -> bool:
        """True when both the API token and the log database id are set."""
        return bool(self.NOTION_TOKEN and self.NOTION_DATABASE_ID_LOG)


def get_settings() -> Settings:
    """FastAPI dependency: settings are re-read on every request."""
    return Settings()
