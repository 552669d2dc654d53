"""Redis cache layer for resolved short URLs."""

import json
import logging
from typing import Optional

import redis.asyncio as redis

from .models import ShortUrl


class RedisCache:
    """Redis cache for path -> destination lookups."""

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 30,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: Default TTL for cached items
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        # configured: a Redis URL was given; enabled: it is also reachable
        self.configured = redis_url is not None
        self.enabled = self.configured
        self.client: Optional[redis.Redis] = None

        if redis_url:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis. A failed connection disables the cache instead of failing startup."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except redis.RedisError as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    async def get_short_url(self, path: str) -> Optional[ShortUrl]:
        """Get a cached mapping.

        Args:
            path: Short path

        Returns:
            Cached mapping or None
        """
        if not self.enabled or not self.client:
            return None

        try:
            raw = await self.client.get(self.get_cache_key(path))
        except redis.RedisError as e:
            self.logger.error(f"Cache get error: {e}")
            return None

        if raw is None:
            return None
        return ShortUrl.from_dict(json.loads(raw))

    async def set_short_url(self, short_url: ShortUrl, ttl: Optional[int] = None) -> bool:
        """Cache a mapping.

        Args:
            short_url: Mapping to cache
            ttl: Optional TTL override (seconds)

        Returns:
            True if successful
        """
        ttl = self.ttl_seconds if ttl is None else ttl
        # setex rejects non-positive expiries; a zero TTL means "do not cache"
        if not self.enabled or not self.client or ttl <= 0:
            return False

        try:
            await self.client.setex(
                self.get_cache_key(short_url.path),
                ttl,
                json.dumps(short_url.to_dict()),
            )
            return True
        except redis.RedisError as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def delete(self, path: str) -> bool:
        """Evict a cached mapping.

        Args:
            path: Short path

        Returns:
            True if deleted
        """
        if not self.enabled or not self.client:
            return False

        try:
            result = await self.client.delete(self.get_cache_key(path))
            return result > 0
        except redis.RedisError as e:
            self.logger.error(f"Cache delete error: {e}")
            return False

    async def ping(self) -> bool:
        if not self.enabled or not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.logger.info("Redis connection closed")

    def get_cache_key(self, path: str) -> str:
        """Generate cache key for a short path."""
        return f"url:shortener:{path}"
