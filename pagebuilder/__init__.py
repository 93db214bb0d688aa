"""
Page builder service.

Manages pages, components, layouts and event handlers of application
versions for the app builder.
"""

__version__ = "0.1.0"
