"""
Environment-driven application settings.

Usage:
    from github_dashboard.config.settings import get_settings

    settings = get_settings()
    uvicorn.run("main:app", host=settings.host, port=settings.port)
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

DEFAULT_PORT = 3001
DEFAULT_GITHUB_BASE_URL = "https://api.github.com"
DEFAULT_API_BASE_URL = "http://localhost:3001"
DEFAULT_WEB_BASE_URL = "http://localhost:4202"


@dataclass(frozen=True)
class AppSettings:
    """Settings read once from the process environment."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    env: str = "development"
    log_level: str = "INFO"
    github_token: Optional[str] = None
    github_base_url: str = DEFAULT_GITHUB_BASE_URL
    api_base_url: str = DEFAULT_API_BASE_URL
    web_base_url: str = DEFAULT_WEB_BASE_URL
    cors_origins: tuple = (DEFAULT_WEB_BASE_URL,)
    database_url: Optional[str] = field(default=None, repr=False)

    @classmethod
    def from_env(cls) -> "AppSettings":
        web_base_url = os.getenv("WEB_BASE_URL", DEFAULT_WEB_BASE_URL)
        cors_raw = os.getenv("CORS_ORIGINS", web_base_url)
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", str(DEFAULT_PORT))),
            env=os.getenv("ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            github_token=os.getenv("GITHUB_TOKEN") or None,
            github_base_url=os.getenv("GITHUB_BASE_URL", DEFAULT_GITHUB_BASE_URL).rstrip("/"),
            api_base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL),
            web_base_url=web_base_url,
            cors_origins=tuple(_split_origins(cors_raw)),
            database_url=normalize_database_url(os.getenv("DATABASE_URL")),
        )


def normalize_database_url(url: Optional[str]) -> Optional[str]:
    """Map the postgres:// scheme to postgresql:// for SQLAlchemy; blank means unset."""
    if not url or not url.strip():
        return None
    url = url.strip()
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql://", 1)
    return url


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings.from_env()
