"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_API_KEY = "76666a29898f491480386d966b75f949"
DEFAULT_BASE_URL = "http://partnerapi.funda.nl/feeds/Aanbod.svc/json"


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class ListingAPISettings:
    """
    Connection, pacing and retry settings for the listing feed.
    """

    api_key: str = DEFAULT_API_KEY
    base_url: str = DEFAULT_BASE_URL
    page_size: int = 25
    max_requests_per_minute: int = 100
    retry_attempts: int = 3
    retry_delay_seconds: float = 2.0
    http_timeout_seconds: float = 30.0


@lru_cache(maxsize=1)
def get_listing_api_settings() -> ListingAPISettings:
    """
    Return cached listing feed settings from environment variables.
    """

    return ListingAPISettings(
        api_key=_get_str_env("LISTING_API_KEY", DEFAULT_API_KEY),
        base_url=_get_str_env("LISTING_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        page_size=max(1, _get_int_env("LISTING_API_PAGE_SIZE", 25)),
        max_requests_per_minute=max(1, _get_int_env("LISTING_API_MAX_REQUESTS_PER_MINUTE", 100)),
        retry_attempts=max(0, _get_int_env("LISTING_API_RETRY_ATTEMPTS", 3)),
        retry_delay_seconds=max(0.0, _get_float_env("LISTING_API_RETRY_DELAY_SECONDS", 2.0)),
        http_timeout_seconds=max(1.0, _get_float_env("LISTING_API_HTTP_TIMEOUT_SECONDS", 30.0)),
    )
