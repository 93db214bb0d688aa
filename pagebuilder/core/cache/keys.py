"""
Redis key generation functions for the page builder cache.

All Redis keys follow the pattern: pagebuilder:version:{version_id}:{entity}

These functions are the SINGLE SOURCE OF TRUTH for key generation.
This package only deletes these keys (see invalidation.py). They are
written by the services that serve version definitions to the editor
and the app runtime, which import the same helpers.
"""

from __future__ import annotations

from uuid import UUID


def _version_scope(version_id: UUID | str) -> str:
    return f"pagebuilder:version:{version_id}"


def version_definition_key(version_id: UUID | str) -> str:
    """
    Key for the serialized definition of a version (pages + components).

    Structure: STRING holding JSON
    """
    return f"{_version_scope(version_id)}:definition"


def version_pages_key(version_id: UUID | str) -> str:
    """Key for the cached page listing of a version."""
    return f"{_version_scope(version_id)}:pages"


def version_events_key(version_id: UUID | str) -> str:
    """Key for the cached event handler listing of a version."""
    return f"{_version_scope(version_id)}:events"


def version_keys(version_id: UUID | str) -> list[str]:
    """All keys derived from a version (used for invalidation)."""
    return [
        version_definition_key(version_id),
        version_pages_key(version_id),
        version_events_key(version_id),
    ]
