"""Client configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_URL = "https://en.wikipedia.org/w/api.php"
DEFAULT_USER_AGENT = "wikiclient/0.1 (https://github.com/wikiclient/wikiclient; wikiclient@example.org)"


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"Environment variable {name} must be an integer") from exc


@dataclass(frozen=True)
class OAuthConfig:
    consumer_key: str
    consumer_secret: str
    access_token: str
    access_secret: str
    api_host: str
    api_path: str


@dataclass(frozen=True)
class Settings:
    api_url: str
    user_agent: str
    request_timeout: int
    maxlag: int
    max_retries: int
    pagination_size: int
    fetch_more_limit: int
    verify_ssl: bool
    log_path: Optional[str]
    oauth: Optional[OAuthConfig]


def _load_oauth_config() -> Optional[OAuthConfig]:
    consumer_key = os.getenv("OAUTH_CONSUMER_KEY")
    consumer_secret = os.getenv("OAUTH_CONSUMER_SECRET")
    access_token = os.getenv("OAUTH_ACCESS_TOKEN")
    access_secret = os.getenv("OAUTH_ACCESS_SECRET")
    if not (consumer_key and consumer_secret and access_token and access_secret):
        return None

    return OAuthConfig(
        consumer_key=consumer_key,
        consumer_secret=consumer_secret,
        access_token=access_token,
        access_secret=access_secret,
        api_host=os.getenv("OAUTH_API_HOST", "commons.wikimedia.org"),
        api_path=os.getenv("OAUTH_API_PATH", "/w/"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    pagination_size = _env_int("WIKI_PAGINATION_SIZE", 10)
    if pagination_size < 1:
        raise ValueError("WIKI_PAGINATION_SIZE must be a positive integer")

    return Settings(
        api_url=os.getenv("WIKI_API_URL", DEFAULT_API_URL),
        user_agent=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        request_timeout=_env_int("WIKI_REQUEST_TIMEOUT", 30),
        maxlag=_env_int("WIKI_MAXLAG", 5),
        max_retries=_env_int("WIKI_MAX_RETRIES", 5),
        pagination_size=pagination_size,
        fetch_more_limit=_env_int("WIKI_FETCH_MORE_LIMIT", 500),
        verify_ssl=_env_bool("WIKI_VERIFY_SSL", default=True),
        log_path=os.getenv("LOG_PATH") or None,
        oauth=_load_oauth_config(),
    )


settings = get_settings()
