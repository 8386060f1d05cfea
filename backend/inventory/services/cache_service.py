"""Redis cache for the city, hotel and room list endpoints."""

import json
import logging
import time
from typing import Any

import redis.asyncio as redis

from inventory.config import settings

logger = logging.getLogger(__name__)

# Key prefixes, one per list endpoint
CITY_LIST = "cities:list"
HOTEL_LIST = "hotels:list"
ROOM_LIST = "rooms:list"

RECONNECT_DELAY = 30  # seconds before retrying an unreachable redis


class CacheService:
    """Read-through list cache. Every redis failure behaves as a miss."""

    def __init__(self):
        self._redis: redis.Redis | None = None
        self._retry_at = 0.0

    async def _client(self) -> redis.Redis | None:
        if not settings.cache_enabled:
            return None
        if self._redis is not None:
            return self._redis
        if time.monotonic() < self._retry_at:
            return None
        try:
            client = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
            await client.ping()
        except Exception as e:
            logger.warning(f"Redis unavailable, list cache off for {RECONNECT_DELAY}s: {e}")
            self._retry_at = time.monotonic() + RECONNECT_DELAY
            return None
        self._redis = client
        return client

    # List endpoint helpers

    def list_key(self, prefix: str, *parts: Any) -> str:
        """``prefix:part:part``; a missing filter is written as ``all``."""
        return ":".join([prefix, *(str(p) if p is not None else "all" for p in parts)])

    async def get_list(self, prefix: str, *parts: Any) -> Any | None:
        key = self.list_key(prefix, *parts)
        try:
            r = await self._client()
            raw = await r.get(key) if r else None
        except Exception as e:
            logger.debug(f"Cache read failed for {key}: {e}")
            return None
        return json.loads(raw) if raw is not None else None

    async def set_list(self, prefix: str, data: Any, *parts: Any) -> bool:
        key = self.list_key(prefix, *parts)
        try:
            r = await self._client()
            if r is None:
                return False
            await r.set(key, json.dumps(data, default=str), ex=settings.list_cache_ttl)
            return True
        except Exception as e:
            logger.debug(f"Cache write failed for {key}: {e}")
            return False

    async def invalidate(self, *prefixes: str) -> int:
        """Drop every cached page under the given list prefixes."""
        removed = 0
        for prefix in prefixes:
            try:
                r = await self._client()
                if r is None:
                    return removed
                keys = [key async for key in r.scan_iter(match=f"{prefix}*")]
                if keys:
                    await r.delete(*keys)
                removed += len(keys)
            except Exception as e:
                logger.warning(f"Cache invalidation failed for {prefix}: {e}")
        return removed

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None


cache_service = CacheService()
