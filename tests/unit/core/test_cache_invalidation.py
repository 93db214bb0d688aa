"""Unit tests for version cache keys and invalidation."""

from unittest.mock import AsyncMock, patch
from uuid import uuid4

import pytest

from pagebuilder.core.cache.invalidation import invalidate_version
from pagebuilder.core.cache.keys import (
    version_definition_key,
    version_events_key,
    version_keys,
    version_pages_key,
)


class TestVersionKeys:
    """Tests for Redis key generation."""

    def test_keys_are_scoped_by_version(self):
        """Every key carries the version id."""
        version_id = uuid4()

        assert version_definition_key(version_id) == f"pagebuilder:version:{version_id}:definition"
        assert version_pages_key(version_id) == f"pagebuilder:version:{version_id}:pages"
        assert version_events_key(version_id) == f"pagebuilder:version:{version_id}:events"

    def test_version_keys_lists_all(self):
        """version_keys covers every derived key."""
        version_id = uuid4()

        assert set(version_keys(version_id)) == {
            version_definition_key(version_id),
            version_pages_key(version_id),
            version_events_key(version_id),
        }


class TestInvalidateVersion:
    """Tests for invalidate_version."""

    @pytest.mark.asyncio
    async def test_deletes_all_version_keys(self):
        """All derived keys are deleted in one call."""
        version_id = uuid4()
        redis = AsyncMock()

        with patch(
            "pagebuilder.core.cache.invalidation.get_shared_redis",
            new=AsyncMock(return_value=redis),
        ):
            await invalidate_version(version_id)

        redis.delete.assert_awaited_once_with(*version_keys(version_id))

    @pytest.mark.asyncio
    async def test_redis_failure_is_logged_not_raised(self, caplog):
        """Invalidation is best-effort."""
        redis = AsyncMock()
        redis.delete.side_effect = ConnectionError("redis down")

        with patch(
            "pagebuilder.core.cache.invalidation.get_shared_redis",
            new=AsyncMock(return_value=redis),
        ):
            await invalidate_version(uuid4())

        assert "Failed to invalidate version cache" in caplog.text
