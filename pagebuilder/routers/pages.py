"""
Pages Router

CRUD, clone and reorder operations for the pages of an application version.
Pages are children of a version and contain components.
"""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.database import get_db
from pagebuilder.core.exceptions import InvariantViolationError, NotFoundError
from pagebuilder.models.contracts.pages import (
    ClonePageResult,
    PageCreate,
    PageUpdate,
    PageWithComponents,
)
from pagebuilder.services.page_service import PageService, page_to_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/app-versions/{version_id}/pages", tags=["Pages"])

DbSession = Annotated[AsyncSession, Depends(get_db)]


# =============================================================================
# Helper Functions
# =============================================================================


def to_http_exception(error: Exception) -> HTTPException:
    """Translate a domain error to the matching HTTP error."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, InvariantViolationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


# =============================================================================
# Page Endpoints
# =============================================================================


@router.get(
    "",
    response_model=list[PageWithComponents],
    summary="List pages",
)
async def list_pages(
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
) -> list[PageWithComponents]:
    """List all pages of a version with their component trees."""
    service = PageService(db)
    return await service.find_pages_for_version(version_id)


@router.get(
    "/{page_id}",
    response_model=PageWithComponents,
    summary="Get page",
)
async def get_page(
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
    page_id: UUID = Path(..., description="Page UUID"),
) -> PageWithComponents:
    """Get one page with its component tree."""
    service = PageService(db)
    page = await service.find_one(page_id)
    if not page or page.app_version_id != version_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Page '{page_id}' not found",
        )
    components = await service.components_service.get_all_components(page.id)
    return page_to_response(page, components)


@router.post(
    "",
    response_model=PageWithComponents,
    status_code=status.HTTP_201_CREATED,
    summary="Create page",
)
async def create_page(
    data: PageCreate,
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
) -> PageWithComponents:
    """Create an empty page."""
    service = PageService(db)
    page = await service.create_page(data, version_id)
    return page_to_response(page)


@router.put(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update page or page order",
)
async def update_page(
    data: PageUpdate,
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
) -> Response:
    """Apply a single-field change to a page, or a reorder map to several pages."""
    service = PageService(db)
    try:
        await service.update_page(data, version_id)
    except (NotFoundError, ValueError) as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{page_id}/clone",
    response_model=ClonePageResult,
    status_code=status.HTTP_201_CREATED,
    summary="Clone page",
)
async def clone_page(
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
    page_id: UUID = Path(..., description="Page UUID"),
) -> ClonePageResult:
    """Clone a page with its components, layouts and event handlers."""
    service = PageService(db)
    try:
        return await service.clone_page(page_id, version_id)
    except NotFoundError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/{page_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete page",
)
async def delete_page(
    db: DbSession,
    version_id: UUID = Path(..., description="App version UUID"),
    page_id: UUID = Path(..., description="Page UUID"),
) -> Response:
    """Delete a page, its components and event handlers."""
    service = PageService(db)
    try:
        await service.delete_page(page_id, version_id)
    except (NotFoundError, InvariantViolationError) as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
