"""
Core Exceptions

Domain exceptions raised by the page services.

Two families are used:
- NotFoundError: the page (or another referenced entity) does not exist
- InvariantViolationError: the operation would break a document invariant

Both abort the enclosing transaction; callers (e.g. the pages router)
translate them to HTTP status codes.
"""


class NotFoundError(Exception):
    """Raised when a referenced entity does not exist."""

    def __init__(self, message: str = "Not found"):
        self.message = message
        super().__init__(self.message)


class PageNotFoundError(NotFoundError):
    """Raised when a page is absent (clone source, update or delete target)."""

    def __init__(self, message: str = "Page not found"):
        super().__init__(message)


class AppVersionNotFoundError(NotFoundError):
    """Raised when an application version cannot be resolved."""

    def __init__(self, message: str = "App version not found"):
        super().__init__(message)


class InvariantViolationError(Exception):
    """
    Raised when a mutation would break a document invariant.

    Usage:
        if editing_version.home_page_id == page_id:
            raise HomePageDeletionError()
    """

    def __init__(self, message: str = "Invariant violation"):
        self.message = message
        super().__init__(self.message)


class HomePageDeletionError(InvariantViolationError):
    """Raised when deleting the home page of the editing version."""

    def __init__(self, message: str = "Cannot delete home page"):
        super().__init__(message)


class PageDeletionError(InvariantViolationError):
    """Raised when the page delete statement affected no rows."""

    def __init__(self, message: str = "Page not deleted"):
        super().__init__(message)
