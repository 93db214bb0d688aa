"""
Page, Component, Layout and EventHandler ORM models.

- pages: one row per page, ordered within its version by a dense index
- components: one row per component; parent holds the id of the parent
  component on the same page (string reference, resolved by id lookup)
- layouts: positional/sizing rows per component and device type
- event_handlers: actions owned by a page or a component (source_id)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Index, Integer, String, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pagebuilder.models.orm.base import Base


class Page(Base):
    """Page entity: a top-level screen within one application version."""

    __tablename__ = "pages"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(255), nullable=False)
    index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    disabled: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    hidden: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    app_version_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_versions.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow,
    )

    components: Mapped[list["Component"]] = relationship(
        "Component",
        back_populates="page",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_pages_app_version_id", "app_version_id"),
    )


class Component(Base):
    """Component placed on a page.

    parent is the id of another component on the same page (or None for
    root components). It is kept as a string so containers can encode
    sub-slots the way the editor writes them.
    """

    __tablename__ = "components"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    page_id: Mapped[UUID] = mapped_column(
        ForeignKey("pages.id", ondelete="CASCADE"), nullable=False
    )
    parent: Mapped[str | None] = mapped_column(String(255), default=None)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    properties: Mapped[dict[str, Any]] = mapped_column(default=dict)
    styles: Mapped[dict[str, Any]] = mapped_column(default=dict)
    general_properties: Mapped[dict[str, Any]] = mapped_column(default=dict)
    validation: Mapped[dict[str, Any]] = mapped_column(default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow,
    )

    page: Mapped["Page"] = relationship("Page", back_populates="components")
    layouts: Mapped[list["Layout"]] = relationship(
        "Layout",
        back_populates="component",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_components_page_id", "page_id"),
    )


class Layout(Base):
    """Position and size of a component for one device type."""

    __tablename__ = "layouts"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    component_id: Mapped[UUID] = mapped_column(
        ForeignKey("components.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="desktop")
    top: Mapped[float] = mapped_column(Float, default=0)
    left: Mapped[float] = mapped_column(Float, default=0)
    width: Mapped[float] = mapped_column(Float, default=0)
    height: Mapped[float] = mapped_column(Float, default=0)

    component: Mapped["Component"] = relationship("Component", back_populates="layouts")

    __table_args__ = (
        Index("ix_layouts_component_id", "component_id"),
    )


class EventHandler(Base):
    """Action triggered by a page or component.

    source_id is the owning page or component id (no FK, the owner type
    is given by target). The event payload may reference another
    component, e.g. {"actionId": "control-component", "componentId": ...}.
    """

    __tablename__ = "event_handlers"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    index: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    event: Mapped[dict[str, Any]] = mapped_column(default=dict)
    source_id: Mapped[UUID] = mapped_column(nullable=False)
    target: Mapped[str] = mapped_column(String(50), nullable=False)
    app_version_id: Mapped[UUID] = mapped_column(
        ForeignKey("app_versions.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        server_default=func.now(),
        onupdate=datetime.utcnow,
    )

    __table_args__ = (
        Index("ix_event_handlers_source_id", "source_id"),
        Index("ix_event_handlers_app_version_id", "app_version_id"),
    )
