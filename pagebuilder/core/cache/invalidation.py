"""
Cache invalidation for version-derived data.

Pattern (Invalidation):
    1. A service commits a version-scoped mutation to the database
    2. The transaction helper calls invalidate_version() to clear Redis
    3. Readers miss and rebuild from the database
"""

from __future__ import annotations

import logging
from uuid import UUID

from .keys import version_keys
from .redis_client import get_shared_redis

logger = logging.getLogger(__name__)


async def invalidate_version(version_id: UUID | str) -> None:
    """
    Invalidate every cache entry derived from a version.

    Args:
        version_id: Version whose pages, events or definition changed
    """
    try:
        r = await get_shared_redis()
        await r.delete(*version_keys(version_id))
        logger.debug(f"Invalidated version cache: version={version_id}")
    except Exception as e:
        # Log but don't fail - cache invalidation is best-effort
        # TTL will eventually clear stale data
        logger.warning(f"Failed to invalidate version cache: {e}")
