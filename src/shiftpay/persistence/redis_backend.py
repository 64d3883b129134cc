"""Redis counter backend implementing ICounterBackend."""

from __future__ import annotations

import redis

from shiftpay.core.exceptions import CacheError


class RedisCounterBackend:
    """Production ICounterBackend backed by Redis."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0) -> None:
        self._host = host
        self._port = port
        self._db = db
        self._client = redis.Redis(
            host=host, port=port, db=db, decode_responses=True,
        )

    def incr(self, key: str, ttl: int) -> int:
        """Increment a counter; the TTL is set when the key is created."""
        try:
            count = int(self._client.incr(key))
            if count == 1:
                self._client.expire(key, ttl)
            return count
        except Exception as exc:
            raise CacheError(f"Redis INCR failed for key={key!r}: {exc}") from exc
