"""
Redis client.

Async Redis wrapper used for the compilation handoff queue.
"""

from functools import lru_cache

import redis.asyncio as redis

from shared.config import settings
from shared.errors import ConfigError


class RedisClient:
    """Async Redis client holding a single connection pool."""

    def __init__(self):
        """Initialize Redis client from REDIS_URL."""
        try:
            self.client = redis.from_url(settings.redis_url, decode_responses=False)
        except Exception as e:
            raise ConfigError(f"Failed to initialize Redis client: {str(e)}") from e


@lru_cache(maxsize=1)
def get_redis_client() -> RedisClient:
    """Shared Redis client, created on first use."""
    return RedisClient()
