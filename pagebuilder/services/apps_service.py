"""
Apps Service

Resolves the application owning a version and the application's editing
version (the version updated most recently).
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.exceptions import AppVersionNotFoundError
from pagebuilder.models.contracts.pages import AppVersionSummary, AppWithEditingVersion
from pagebuilder.models.orm.applications import Application, AppVersion

logger = logging.getLogger(__name__)


class AppsService:
    """Service for application/version lookups."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_version(self, version_id: UUID) -> AppVersion | None:
        """Get a version by id."""
        result = await self.session.execute(
            select(AppVersion).where(AppVersion.id == version_id)
        )
        return result.scalar_one_or_none()

    async def find_app_from_version(self, version_id: UUID) -> AppWithEditingVersion:
        """
        Get the application owning version_id with its editing version.

        Raises:
            AppVersionNotFoundError: If the version does not exist
        """
        version = await self.get_version(version_id)
        if not version:
            raise AppVersionNotFoundError(f"App version '{version_id}' not found")

        app_result = await self.session.execute(
            select(Application).where(Application.id == version.app_id)
        )
        app = app_result.scalar_one()

        editing_query = (
            select(AppVersion)
            .where(AppVersion.app_id == app.id)
            .order_by(AppVersion.updated_at.desc(), AppVersion.created_at.desc())
            .limit(1)
        )
        editing_result = await self.session.execute(editing_query)
        editing_version = editing_result.scalar_one_or_none()

        return AppWithEditingVersion(
            id=app.id,
            name=app.name,
            editing_version=(
                AppVersionSummary.model_validate(editing_version) if editing_version else None
            ),
        )
