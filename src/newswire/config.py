"""Configuration loading and validation."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Config:
    """Application configuration. All values sourced from environment variables."""

    # Required
    database_path: str

    # Optional: upstream credentials, keyed by source name
    api_keys: dict[str, str] = field(default_factory=dict)

    # Optional: Ingestion
    page_delay_seconds: int = 12
    request_timeout_seconds: int = 30
    fetch_schedule_cron: str = "0 0 * * *"
    fetch_timezone: str = "UTC"

    # Optional: Application
    log_level: str = "INFO"
    log_format: str = "json"
    app_env: str = "production"

    @property
    def configured_sources(self) -> tuple[str, ...]:
        """Source names with credentials set, i.e. the ingestion allow-list."""
        return tuple(sorted(name for name, key in self.api_keys.items() if key))


_REQUIRED_VARS = [
    "DATABASE_PATH",
]

# Source name -> environment variable holding its API key
_API_KEY_VARS = {
    "newsapi": "NEWSAPI_API_KEY",
    "guardian": "GUARDIAN_API_KEY",
    "nytimes": "NYTIMES_API_KEY",
}


def load_config(env_path: str | Path | None = None) -> Config:
    """Load configuration from environment variables.

    Loads a .env file if present (for local development), then validates
    that all required variables are set. Raises ValueError listing any
    missing variables.
    """
    load_dotenv(dotenv_path=env_path)

    missing = [var for var in _REQUIRED_VARS if not os.environ.get(var)]
    if missing:
        raise ValueError(
            f"Missing required environment variables: {', '.join(missing)}"
        )

    api_keys = {
        source: os.environ[var]
        for source, var in _API_KEY_VARS.items()
        if os.environ.get(var)
    }

    return Config(
        # Required
        database_path=os.environ["DATABASE_PATH"],
        # Optional: upstream credentials
        api_keys=api_keys,
        # Optional: Ingestion
        page_delay_seconds=int(os.environ.get("PAGE_DELAY_SECONDS", "12")),
        request_timeout_seconds=int(os.environ.get("REQUEST_TIMEOUT_SECONDS", "30")),
        fetch_schedule_cron=os.environ.get("FETCH_SCHEDULE_CRON", "0 0 * * *"),
        fetch_timezone=os.environ.get("FETCH_TIMEZONE", "UTC"),
        # Optional: Application
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        log_format=os.environ.get("LOG_FORMAT", "json"),
        app_env=os.environ.get("APP_ENV", "production"),
    )
