"""
Events Service

Lookup and removal of event handlers owned by pages and components.
"""

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.models.orm.pages import EventHandler

logger = logging.getLogger(__name__)

# Action that targets another component; its payload carries componentId
CONTROL_COMPONENT_ACTION = "control-component"


class EventsService:
    """Service for event handler operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_events_for_version(self, version_id: UUID) -> list[EventHandler]:
        """All event handlers of a version."""
        query = (
            select(EventHandler)
            .where(EventHandler.app_version_id == version_id)
            .order_by(EventHandler.index, EventHandler.created_at)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_all_events_with_source_id(self, source_id: UUID) -> list[EventHandler]:
        """Event handlers owned by one page or component, in firing order."""
        query = (
            select(EventHandler)
            .where(EventHandler.source_id == source_id)
            .order_by(EventHandler.index, EventHandler.created_at)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def cascade_delete_events(self, source_id: UUID) -> int:
        """
        Delete every event handler owned by source_id.

        Returns number of deleted handlers.
        """
        result = await self.session.execute(
            delete(EventHandler).where(EventHandler.source_id == source_id)
        )
        count = result.rowcount or 0
        logger.info(f"Deleted {count} event handlers of source {source_id}")
        return count
