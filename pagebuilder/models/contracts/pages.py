"""
Pydantic contracts for pages, components and event handlers.

Request models validate caller input; response models are built from ORM
rows with from_attributes. Page responses never expose app_version_id,
pages are always fetched in the context of a version.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer


# ==================== PAGE MODELS ====================


class PageCreate(BaseModel):
    """Input for creating a page. The editor usually supplies the id."""

    id: UUID | None = Field(default=None, description="Client-generated page id")
    name: str = Field(min_length=1, max_length=255, description="Page display name")
    handle: str = Field(
        min_length=1,
        max_length=255,
        pattern=r"^[A-Za-z0-9_-]+$",
        description="URL-safe page slug",
    )
    index: int = Field(ge=0, description="Position of the page within the version")


class PageUpdate(BaseModel):
    """
    Input for updating pages.

    diff is either a single-field change-set for page_id
    ({"name": "Settings"}) or a reorder map covering several pages
    ({"<page id>": {"index": 0}, "<page id>": {"index": 1}}).
    """

    model_config = ConfigDict(populate_by_name=True)

    page_id: UUID | None = Field(
        default=None,
        validation_alias=AliasChoices("page_id", "pageId"),
        description="Target page for single-field updates",
    )
    diff: dict[str, Any] = Field(description="Change-set or reorder map")


class PageResponse(BaseModel):
    """Page row without its version reference."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    handle: str
    index: int
    disabled: bool
    hidden: bool
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_dt(self, dt: datetime) -> str:
        return dt.isoformat()


# ==================== COMPONENT MODELS ====================


class ComponentTreeNode(BaseModel):
    """Component with its nested children, as returned to the editor."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: str
    parent: str | None = None
    properties: dict[str, Any] = Field(default_factory=dict)
    styles: dict[str, Any] = Field(default_factory=dict)
    general_properties: dict[str, Any] = Field(default_factory=dict)
    validation: dict[str, Any] = Field(default_factory=dict)
    layouts: list["LayoutResponse"] = Field(default_factory=list)
    children: list["ComponentTreeNode"] = Field(default_factory=list)


class LayoutResponse(BaseModel):
    """Layout row for a component."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: str
    top: float
    left: float
    width: float
    height: float


class PageWithComponents(PageResponse):
    """Page with its full component tree."""

    components: list[ComponentTreeNode] = Field(default_factory=list)


# ==================== EVENT HANDLER MODELS ====================


class EventHandlerResponse(BaseModel):
    """Event handler row."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    index: int
    event: dict[str, Any]
    source_id: UUID
    target: str
    app_version_id: UUID


class ClonePageResult(BaseModel):
    """Refreshed page and event listings for the version after a clone."""

    pages: list[PageWithComponents]
    events: list[EventHandlerResponse]


# ==================== VERSION MODELS ====================


class AppVersionSummary(BaseModel):
    """Version reference used for home page lookups."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    home_page_id: UUID | None = None
    updated_at: datetime


class AppWithEditingVersion(BaseModel):
    """Application resolved from one of its versions."""

    id: UUID
    name: str
    editing_version: AppVersionSummary | None = None


ComponentTreeNode.model_rebuild()
