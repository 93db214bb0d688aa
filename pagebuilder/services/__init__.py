"""
Page builder services.
"""

from pagebuilder.services.apps_service import AppsService
from pagebuilder.services.components_service import ComponentsService
from pagebuilder.services.events_service import EventsService
from pagebuilder.services.page_service import PageService

__all__ = [
    "AppsService",
    "ComponentsService",
    "EventsService",
    "PageService",
]
