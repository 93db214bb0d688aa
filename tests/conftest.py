"""
Pytest fixtures for page builder testing.

This module provides:
1. Database fixtures (in-memory SQLite through aiosqlite, one per test)
2. Cache fixtures (Redis invalidation patched out)
3. Seed helpers for apps, versions, pages, components, layouts and events
"""

import os
from typing import Any, AsyncGenerator
from unittest.mock import AsyncMock, patch
from uuid import UUID, uuid4

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pagebuilder.models.orm import (
    Application,
    AppVersion,
    Base,
    Component,
    EventHandler,
    Layout,
    Page,
)

TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Set up test environment variables once per session."""
    os.environ["PAGEBUILDER_ENVIRONMENT"] = "testing"
    os.environ["PAGEBUILDER_DATABASE_URL"] = TEST_DATABASE_URL

    from pagebuilder.config import get_settings
    from pagebuilder.core.database import reset_db_state

    get_settings.cache_clear()
    reset_db_state()

    yield

    get_settings.cache_clear()
    reset_db_state()


# ==================== DATABASE FIXTURES ====================


@pytest_asyncio.fixture
async def async_engine():
    """
    Create a fresh in-memory database for each test.

    StaticPool keeps the single SQLite connection alive for the whole test;
    foreign keys are switched on so ON DELETE CASCADE behaves as in Postgres.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def async_session_factory(async_engine):
    """Create async session factory."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture
async def db_session(async_session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for each test."""
    async with async_session_factory() as session:
        yield session
        await session.rollback()


# ==================== CACHE FIXTURES ====================


@pytest.fixture(autouse=True)
def mock_invalidate_version():
    """Patch Redis invalidation used by the version transaction helper."""
    with patch(
        "pagebuilder.core.transactions.invalidate_version",
        new_callable=AsyncMock,
    ) as mock:
        yield mock


# ==================== SEED HELPERS ====================


class Seeder:
    """Inserts test rows through a session and commits them."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def version(self, name: str = "v1", app_name: str = "Test App") -> AppVersion:
        app = Application(id=uuid4(), name=app_name, slug=app_name.lower().replace(" ", "-"))
        version = AppVersion(id=uuid4(), app_id=app.id, name=name)
        self.session.add_all([app, version])
        await self.session.commit()
        return version

    async def page(
        self,
        version: AppVersion,
        name: str,
        handle: str,
        index: int,
    ) -> Page:
        page = Page(id=uuid4(), name=name, handle=handle, index=index, app_version_id=version.id)
        self.session.add(page)
        await self.session.commit()
        return page

    async def component(
        self,
        page: Page,
        name: str,
        type: str = "Button",
        parent: Component | str | None = None,
        properties: dict[str, Any] | None = None,
    ) -> Component:
        parent_ref = str(parent.id) if isinstance(parent, Component) else parent
        component = Component(
            id=uuid4(),
            page_id=page.id,
            parent=parent_ref,
            name=name,
            type=type,
            properties=properties or {"text": {"value": name}},
            styles={},
            general_properties={},
            validation={},
        )
        self.session.add(component)
        await self.session.commit()
        return component

    async def layout(
        self,
        component: Component,
        type: str = "desktop",
        top: float = 10,
        left: float = 5,
    ) -> Layout:
        layout = Layout(
            id=uuid4(),
            component_id=component.id,
            type=type,
            top=top,
            left=left,
            width=6,
            height=40,
        )
        self.session.add(layout)
        await self.session.commit()
        return layout

    async def event(
        self,
        version: AppVersion,
        source_id: UUID,
        target: str,
        event: dict[str, Any],
        name: str = "onClick",
        index: int = 0,
    ) -> EventHandler:
        handler = EventHandler(
            id=uuid4(),
            name=name,
            index=index,
            event=event,
            source_id=source_id,
            target=target,
            app_version_id=version.id,
        )
        self.session.add(handler)
        await self.session.commit()
        return handler


@pytest.fixture
def seed(db_session) -> Seeder:
    """Seed helper bound to the test session."""
    return Seeder(db_session)
