"""
Redis caching for API read endpoints.

Entries live in namespaces ("reservations", "clients", "settings"); every
write endpoint invalidates the namespaces it touches. The cache fails open:
when Redis is disabled or unreachable reads miss and writes are no-ops.
"""

import json
import logging
import os
from typing import Any, Optional

import redis

from .config import CACHE_ENABLED, CACHE_KEY_PREFIX

logger = logging.getLogger(__name__)

RESERVATIONS = "reservations"
CLIENTS = "clients"
SETTINGS = "settings"


def get_redis_client() -> redis.Redis:
    """
    Create a Redis client from REDIS_URL, or from REDIS_HOST/PORT/DB/PASSWORD
    """
    redis_url = os.getenv("REDIS_URL")

    if redis_url:
        # Mask password in URL for logging
        if "@" in redis_url:
            url_parts = redis_url.split("@")
            protocol = url_parts[0].split(":")[0]
            masked_url = f"{protocol}:****@{url_parts[1]}"
        else:
            masked_url = "****"
        logger.info(f"📡 Using Redis URL connection: {masked_url}")

        client = redis.from_url(
            redis_url,
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )
    else:
        client = redis.Redis(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=int(os.getenv("REDIS_PORT", "6379")),
            db=int(os.getenv("REDIS_DB", "0")),
            password=os.getenv("REDIS_PASSWORD", None),
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
        )

    client.ping()
    logger.info("Redis connected successfully")
    return client


class Cache:
    """Namespaced Redis cache with JSON serialization"""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        enabled: bool = CACHE_ENABLED,
        prefix: str = CACHE_KEY_PREFIX,
    ):
        self.redis_client = client
        self.enabled = enabled
        self.prefix = prefix

    def _get_client(self):
        """Lazy load Redis client"""
        if not self.enabled:
            return None
        if self.redis_client is None:
            try:
                self.redis_client = get_redis_client()
            except Exception as e:
                logger.warning(f"⚠️ Redis cache unavailable: {e}")
                return None
        return self.redis_client

    def _key(self, namespace: str, key: str) -> str:
        return f"{self.prefix}:{namespace}:{key}"

    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Get value from cache"""
        client = self._get_client()
        if not client:
            return None

        cache_key = self._key(namespace, key)
        try:
            value = client.get(cache_key)
            if value:
                logger.debug(f"✅ Cache HIT: {cache_key}")
                return json.loads(value)
            logger.debug(f"❌ Cache MISS: {cache_key}")
            return None
        except Exception as e:
            logger.error(f"❌ Cache get error for {cache_key}: {e}")
            return None

    def set(self, namespace: str, key: str, value: Any, ttl: int) -> bool:
        """Set value in cache with a TTL in seconds"""
        client = self._get_client()
        if not client:
            return False

        cache_key = self._key(namespace, key)
        try:
            client.setex(cache_key, ttl, json.dumps(value))
            logger.debug(f"✅ Cache SET: {cache_key} (TTL: {ttl}s)")
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for {cache_key}: {e}")
            return False

    def invalidate(self, *namespaces: str) -> int:
        """Delete every entry in the given namespaces"""
        client = self._get_client()
        if not client:
            return 0

        deleted = 0
        for namespace in namespaces:
            pattern = self._key(namespace, "*")
            try:
                keys = client.keys(pattern)
                if keys:
                    deleted += client.delete(*keys)
                logger.debug(f"✅ Cache INVALIDATE: {namespace}")
            except Exception as e:
                logger.error(f"❌ Cache invalidate error for {pattern}: {e}")
        return deleted


# Global cache instance
cache = Cache()


def get_cache() -> Cache:
    """Dependency hook so tests can swap the cache"""
    return cache
