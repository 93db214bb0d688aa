"""
Application and AppVersion ORM models.

- applications: app metadata
- app_versions: versioned containers for pages and events; the version
  updated most recently is the application's editing version
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagebuilder.models.orm.base import Base

if TYPE_CHECKING:
    from pagebuilder.models.orm.pages import Page


class Application(Base):
    """Application entity for the app builder."""

    __tablename__ = "apps"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str | None] = mapped_column(String(255), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow,
    )

    versions: Mapped[list["AppVersion"]] = relationship(
        "AppVersion",
        back_populates="app",
        cascade="all, delete-orphan",
    )


class AppVersion(Base):
    """Version of an application.

    home_page_id points at the page opened first; that page cannot be
    deleted while the version is being edited.
    """

    __tablename__ = "app_versions"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    app_id: Mapped[UUID] = mapped_column(
        ForeignKey("apps.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    home_page_id: Mapped[UUID | None] = mapped_column(default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow,
    )

    app: Mapped["Application"] = relationship("Application", back_populates="versions")
    pages: Mapped[list["Page"]] = relationship(
        "Page",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_app_versions_app_id", "app_id"),
    )
