"""Infrastructure cache module."""

from .cache_service import DailyCache
from .redis_client import RedisClient

__all__ = ["DailyCache", "RedisClient"]
