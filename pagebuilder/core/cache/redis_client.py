"""
Shared Redis connection for cache operations.
"""

import logging

import redis.asyncio as redis

from pagebuilder.config import get_settings

logger = logging.getLogger(__name__)

_redis: redis.Redis | None = None


async def get_shared_redis() -> redis.Redis:
    """Get or create the shared Redis connection."""
    global _redis
    if _redis is None:
        settings = get_settings()
        _redis = redis.from_url(
            settings.redis_url,
            decode_responses=True,
        )
    return _redis


async def close_shared_redis() -> None:
    """Close the shared Redis connection."""
    global _redis
    if _redis is not None:
        await _redis.aclose()
        logger.info("Redis connection closed")
    _redis = None
