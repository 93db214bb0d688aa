"""
SQLAlchemy ORM Models for the page builder

Pure database models using SQLAlchemy 2.0 declarative style.
For API schemas (Create/Update/Response), see pagebuilder.models.contracts.
"""

from pagebuilder.models.orm.applications import Application, AppVersion
from pagebuilder.models.orm.base import Base
from pagebuilder.models.orm.pages import Component, EventHandler, Layout, Page

__all__ = [
    # Base
    "Base",
    # Applications
    "Application",
    "AppVersion",
    # Pages
    "Page",
    "Component",
    "Layout",
    "EventHandler",
]
