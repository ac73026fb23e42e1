import time
import logging
from typing import Any, Callable, Dict, Optional, Tuple

from phoenix.infrastructure.cache.redis_client import RedisClient

logger = logging.getLogger(__name__)


class DailyCache:
    """
    Date-keyed payload cache with a fixed time-to-live.

    Owns a mapping key -> (payload, expiry timestamp). An expired entry is
    evicted when read, and every write drops all expired entries so past
    days do not accumulate. An optional Redis client acts as a shared
    layer so several workers can reuse the same day's payload.

    There is no lock: two concurrent misses may both fetch upstream and the
    last write wins.
    """

    TTL_DAILY = 86400  # One day

    def __init__(
        self,
        ttl_seconds: int = TTL_DAILY,
        redis_client: Optional[RedisClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        """Initialize the cache service."""
        self.ttl_seconds = ttl_seconds
        self.redis = redis_client
        self._clock = clock
        self._entries: Dict[str, Tuple[Any, float]] = {}
        self._hits = 0
        self._misses = 0

    @staticmethod
    def today_key(date_str: str) -> str:
        """Cache key for a day's payload."""
        return f"today:{date_str}"

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def redis_connected(self) -> bool:
        return self.redis is not None and self.redis.is_connected

    def get(self, key: str) -> Optional[Any]:
        """Get a live value (memory first, then Redis)."""
        entry = self._entries.get(key)
        if entry is not None:
            payload, expires_at = entry
            if self._clock() < expires_at:
                self._hits += 1
                return payload
            del self._entries[key]
            logger.info(f"Cache entry expired: {key}")

        if self.redis is not None:
            payload = self.redis.get(key)
            if payload is not None:
                # Redis owns the real expiry; keep a local copy for one TTL
                self._entries[key] = (payload, self._clock() + self.ttl_seconds)
                self._hits += 1
                return payload

        self._misses += 1
        return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        """Store a value in memory (and Redis when configured)."""
        now = self._clock()
        self._purge_expired(now)
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        self._entries[key] = (value, now + ttl)
        if self.redis is not None:
            self.redis.set(key, value, ttl)

    def _purge_expired(self, now: float) -> None:
        # Expired entries of any day are dropped on write
        expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.info(f"Evicted {len(expired)} expired cache entries")

    def invalidate(self, key: str) -> bool:
        """Invalidate a specific cache entry."""
        in_mem = self._entries.pop(key, None) is not None
        redis_ok = self.redis.delete(key) if self.redis is not None else False
        return in_mem or redis_ok

    def clear(self) -> None:
        """Clear all in-memory entries."""
        self._entries.clear()
        logger.info("Cache cleared")

    def keys(self) -> list[str]:
        """Keys currently held in memory and not yet expired."""
        now = self._clock()
        return [key for key, (_, expires_at) in self._entries.items() if now < expires_at]

    # --- Helper methods for the daily payload ---

    def get_today(self, date_str: str) -> Optional[Any]:
        """Get a day's payload from cache."""
        return self.get(self.today_key(date_str))

    def set_today(self, date_str: str, payload: Any) -> None:
        """Set a day's payload with the default TTL."""
        self.set(self.today_key(date_str), payload)
