"""
Page builder models

ORM models (database tables):
    from pagebuilder.models.orm import Page, Component
    from pagebuilder.models.orm.pages import Page  # Granular access

Pydantic contracts (API request/response):
    from pagebuilder.models.contracts.pages import PageCreate, PageUpdate
"""

from pagebuilder.models.orm import (
    Application,
    AppVersion,
    Base,
    Component,
    EventHandler,
    Layout,
    Page,
)

__all__ = [
    "Base",
    "Application",
    "AppVersion",
    "Page",
    "Component",
    "Layout",
    "EventHandler",
]
