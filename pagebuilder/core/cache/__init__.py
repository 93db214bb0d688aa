"""
Redis cache helpers for version-derived data.
"""

from .invalidation import invalidate_version
from .keys import version_definition_key, version_events_key, version_keys, version_pages_key

__all__ = [
    "invalidate_version",
    "version_definition_key",
    "version_events_key",
    "version_keys",
    "version_pages_key",
]
