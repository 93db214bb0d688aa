"""
Pydantic contracts for the page builder API.
"""

from pagebuilder.models.contracts.pages import (
    AppVersionSummary,
    AppWithEditingVersion,
    ClonePageResult,
    ComponentTreeNode,
    EventHandlerResponse,
    LayoutResponse,
    PageCreate,
    PageResponse,
    PageUpdate,
    PageWithComponents,
)

__all__ = [
    "AppVersionSummary",
    "AppWithEditingVersion",
    "ClonePageResult",
    "ComponentTreeNode",
    "EventHandlerResponse",
    "LayoutResponse",
    "PageCreate",
    "PageResponse",
    "PageUpdate",
    "PageWithComponents",
]
