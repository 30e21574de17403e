"""Web API configuration, read from the same environment as the service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class WebConfig:
    """Settings for serving the read-only articles API. No upstream API keys."""

    # Required
    database_path: str

    # Optional
    web_host: str = "0.0.0.0"
    web_port: int = 8080
    articles_per_page: int = 10
    log_level: str = "INFO"
    log_format: str = "json"


def load_web_config(env_path: str | Path | None = None) -> WebConfig:
    """Load web configuration from environment variables.

    DATABASE_PATH is the only required variable. Raises ValueError if it is
    missing or if a numeric setting is not a positive integer.
    """
    load_dotenv(dotenv_path=env_path)

    if not os.environ.get("DATABASE_PATH"):
        raise ValueError("Missing required environment variable: DATABASE_PATH")

    web_port = _positive_int("WEB_PORT", "8080")
    articles_per_page = _positive_int("ARTICLES_PER_PAGE", "10")
    if articles_per_page > 100:
        raise ValueError("ARTICLES_PER_PAGE must not exceed 100")

    return WebConfig(
        database_path=os.environ["DATABASE_PATH"],
        web_host=os.environ.get("WEB_HOST", "0.0.0.0"),
        web_port=web_port,
        articles_per_page=articles_per_page,
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        log_format=os.environ.get("LOG_FORMAT", "json"),
    )


def _positive_int(name: str, default: str) -> int:
    raw = os.environ.get(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 1:
        raise ValueError(f"{name} must be positive, got {value}")
    return value
