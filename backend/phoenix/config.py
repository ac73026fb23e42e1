"""
Application Configuration

All settings come from the environment (optionally a .env file).
A missing API key is a supported deployment mode: the service then
serves a demo payload instead of failing at startup.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from phoenix.utils.time_utils import DEFAULT_TZ_NAME

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class AppSettings:
    """Runtime settings for the API and the upstream provider."""
    api_football_key: Optional[str] = None
    api_football_base_url: str = "https://v3.football.api-sports.io"
    api_football_timeout: float = 30.0
    timezone: str = DEFAULT_TZ_NAME
    port: int = 10000
    cache_ttl_seconds: int = 86400
    cors_origins: list[str] = field(default_factory=list)
    redis_host: Optional[str] = None
    redis_port: int = 6379
    redis_password: Optional[str] = None
    enable_scheduler: bool = False
    log_level: str = "INFO"

    @property
    def demo_mode(self) -> bool:
        """True when no upstream key is configured."""
        return not self.api_football_key

    @classmethod
    def from_env(cls) -> "AppSettings":
        """Build settings from environment variables."""
        return cls(
            api_football_key=os.getenv("API_FOOTBALL_KEY") or None,
            api_football_base_url=os.getenv("API_FOOTBALL_BASE_URL", cls.api_football_base_url).rstrip("/"),
            api_football_timeout=float(os.getenv("API_FOOTBALL_TIMEOUT", "30")),
            timezone=os.getenv("APP_TIMEZONE", DEFAULT_TZ_NAME),
            port=int(os.getenv("PORT", "10000")),
            cache_ttl_seconds=int(os.getenv("CACHE_TTL_SECONDS", "86400")),
            cors_origins=[o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()],
            redis_host=os.getenv("REDIS_HOST") or None,
            redis_port=int(os.getenv("REDIS_PORT", "6379")),
            redis_password=os.getenv("REDIS_PASSWORD") or None,
            enable_scheduler=_env_bool("ENABLE_SCHEDULER"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache()
def get_settings() -> AppSettings:
    """Get application settings (cached)."""
    return AppSettings.from_env()
