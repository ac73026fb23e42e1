"""
Redis Client Module

Optional shared layer behind the in-memory daily cache. Payloads are
stored as JSON under a key prefix; every Redis failure is logged and
treated as a miss so the API keeps answering from memory.
"""

import json
import logging
from typing import Any, Callable, Optional

import redis

logger = logging.getLogger(__name__)


class RedisClient:
    """JSON payload store on top of redis-py."""

    KEY_PREFIX = "phoenix:"

    def __init__(
        self,
        host: str,
        port: int = 6379,
        db: int = 0,
        password: Optional[str] = None,
        client: Optional[redis.Redis] = None,
    ):
        self.address = f"{host}:{port}"
        self._redis = client or redis.Redis(
            host=host,
            port=port,
            db=db,
            password=password,
            decode_responses=True,
            socket_timeout=5,
        )
        if not self._call("ping", lambda r: r.ping()):
            logger.error(f"Redis unavailable at {self.address}, using memory only")
            self._redis = None
        else:
            logger.info(f"Daily cache shared through Redis at {self.address}")

    def _key(self, key: str) -> str:
        return f"{self.KEY_PREFIX}{key}"

    def _call(self, op: str, fn: Callable[[redis.Redis], Any]) -> Any:
        """Run one Redis operation; None when disconnected or on error."""
        if self._redis is None:
            return None
        try:
            return fn(self._redis)
        except redis.RedisError as e:
            logger.error(f"Redis {op} failed: {e}")
            return None

    @property
    def is_connected(self) -> bool:
        return bool(self._call("ping", lambda r: r.ping()))

    def get(self, key: str) -> Optional[Any]:
        raw = self._call("get", lambda r: r.get(self._key(key)))
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.error(f"Discarding undecodable Redis value for {key}")
            return None

    def set(self, key: str, value: Any, ttl_seconds: int) -> bool:
        body = json.dumps(value)
        return bool(self._call("set", lambda r: r.set(self._key(key), body, ex=ttl_seconds)))

    def delete(self, key: str) -> bool:
        return bool(self._call("delete", lambda r: r.delete(self._key(key))))
