"""
Page Service

Version-scoped page operations for the app builder:
- List, fetch, create and update pages
- Clone a page with its components, layouts and event handlers
- Reorder pages and delete a page while keeping the index dense

Mutations run inside db_transaction_for_version_update, so each public
operation either commits entirely or leaves the store unchanged.
"""

import copy
import logging
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.core.exceptions import (
    HomePageDeletionError,
    PageDeletionError,
    PageNotFoundError,
)
from pagebuilder.core.transactions import db_transaction_for_version_update, db_transaction_wrap
from pagebuilder.models.contracts.pages import (
    ClonePageResult,
    ComponentTreeNode,
    EventHandlerResponse,
    PageCreate,
    PageUpdate,
    PageWithComponents,
)
from pagebuilder.models.orm.pages import Component, EventHandler, Layout, Page
from pagebuilder.services.apps_service import AppsService
from pagebuilder.services.components_service import ComponentsService
from pagebuilder.services.events_service import CONTROL_COMPONENT_ACTION, EventsService

logger = logging.getLogger(__name__)

# Columns a single-page update may change
PAGE_UPDATABLE_FIELDS = frozenset({"name", "handle", "index", "disabled", "hidden"})


# =============================================================================
# Helpers
# =============================================================================


def page_to_response(
    page: Page,
    components: list[ComponentTreeNode] | None = None,
) -> PageWithComponents:
    """Convert ORM page to response (app_version_id is not exposed)."""
    return PageWithComponents(
        id=page.id,
        name=page.name,
        handle=page.handle,
        index=page.index,
        disabled=page.disabled,
        hidden=page.hidden,
        created_at=page.created_at,
        updated_at=page.updated_at,
        components=components or [],
    )


def clone_name_and_handle(name: str, handle: str, pages: list[Page]) -> tuple[str, str]:
    """
    Pick the name and handle of a page copy.

    Starts from "<name> (copy)" / "<handle>-copy". Any page whose name
    contains the base name or whose handle contains the base handle counts
    as a collision; with n collisions the copy becomes "<name> (copy n)" /
    "<handle>-copy-n". Substring matching keeps this approximate: unrelated
    pages that happen to contain the base text also count.
    """
    page_name = f"{name} (copy)"
    page_handle = f"{handle}-copy"

    collisions = [
        p for p in pages if page_name in p.name or page_handle in p.handle
    ]
    if collisions:
        page_name = f"{name} (copy {len(collisions)})"
        page_handle = f"{handle}-copy-{len(collisions)}"

    return page_name, page_handle


def remap_event_definition(
    definition: dict[str, Any] | None,
    components_id_map: dict[str, str],
) -> dict[str, Any]:
    """
    Copy an event payload, pointing control-component actions at clones.

    References to components that were not cloned are left as they are.
    """
    cloned = copy.deepcopy(definition or {})
    if cloned.get("actionId") == CONTROL_COMPONENT_ACTION:
        component_id = cloned.get("componentId")
        if component_id is not None:
            cloned["componentId"] = components_id_map.get(str(component_id), component_id)
    return cloned


def rearrange_pages_on_delete(pages: list[Page], page_deleted_index: int) -> dict[UUID, int]:
    """
    Compute new indexes for the pages left after a delete.

    Every page positioned after the deleted one moves up by one.

    Args:
        pages: Remaining pages of the version, ordered by index
        page_deleted_index: Index the deleted page had

    Returns:
        Mapping of page id to new index, for pages whose index changes
    """
    return {
        page.id: page.index - 1
        for page in pages
        if page.index > page_deleted_index
    }


# =============================================================================
# Service Class
# =============================================================================


class PageService:
    """Service for version-scoped page operations."""

    def __init__(
        self,
        session: AsyncSession,
        components_service: ComponentsService | None = None,
        events_service: EventsService | None = None,
        apps_service: AppsService | None = None,
    ):
        self.session = session
        self.components_service = components_service or ComponentsService(session)
        self.events_service = events_service or EventsService(session)
        self.apps_service = apps_service or AppsService(session)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    async def list_version_pages(self, version_id: UUID) -> list[Page]:
        """Page rows of a version, ordered by index."""
        query = (
            select(Page)
            .where(Page.app_version_id == version_id)
            .order_by(Page.index, Page.created_at)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_pages_for_version(self, version_id: UUID) -> list[PageWithComponents]:
        """All pages of a version, each with its component tree."""
        pages = await self.list_version_pages(version_id)
        return [
            page_to_response(page, await self.components_service.get_all_components(page.id))
            for page in pages
        ]

    async def find_one(self, page_id: UUID) -> Page | None:
        """Get a page by id."""
        result = await self.session.execute(select(Page).where(Page.id == page_id))
        return result.scalar_one_or_none()

    # -------------------------------------------------------------------------
    # Create / Update
    # -------------------------------------------------------------------------

    async def create_page(self, data: PageCreate, version_id: UUID) -> Page:
        """Create a page in a version at the caller-supplied index."""

        async def work(session: AsyncSession) -> Page:
            page = Page(
                id=data.id or uuid4(),
                name=data.name,
                handle=data.handle,
                index=data.index,
                app_version_id=version_id,
            )
            session.add(page)
            await session.flush()
            return page

        page = await db_transaction_for_version_update(self.session, version_id, work)
        logger.info(f"Created page '{page.name}' ({page.id}) in version {version_id}")
        return page

    async def update_page(self, page_update: PageUpdate, version_id: UUID) -> Page | None:
        """
        Apply a change-set to a page.

        A diff with more than one key is a reorder map ({page id: {"index": n}})
        and is handed to update_pages_order. Otherwise the single field is
        updated on page_update.page_id.

        Raises:
            PageNotFoundError: If the target page is not in the version
            ValueError: If the field is not an updatable page column or the
                value is None
        """
        if len(page_update.diff) > 1:
            await self.update_pages_order(page_update.diff, version_id)
            return None

        current_page = (
            await self.find_one(page_update.page_id) if page_update.page_id else None
        )
        if not current_page or current_page.app_version_id != version_id:
            raise PageNotFoundError()

        unknown = set(page_update.diff) - PAGE_UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update page fields: {', '.join(sorted(unknown))}")

        # Every updatable page column is NOT NULL
        nulls = [field for field, value in page_update.diff.items() if value is None]
        if nulls:
            raise ValueError(f"Page fields cannot be null: {', '.join(sorted(nulls))}")

        async def work(session: AsyncSession) -> Page:
            for field, value in page_update.diff.items():
                setattr(current_page, field, value)
            await session.flush()
            return current_page

        page = await db_transaction_for_version_update(self.session, version_id, work)
        logger.info(f"Updated page {page.id}: {sorted(page_update.diff)}")
        return page

    async def update_pages_order(self, pages: dict[str, Any], version_id: UUID) -> None:
        """
        Set the index of several pages at once.

        Args:
            pages: Mapping of page id to {"index": n}
            version_id: Version the pages belong to

        Raises:
            ValueError: If a key is not a page id or an entry has no index
        """
        pages_to_update: list[tuple[UUID, int]] = []
        for page_id, changes in pages.items():
            try:
                pages_to_update.append((UUID(str(page_id)), int(changes["index"])))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"Invalid page order entry for '{page_id}'") from e

        async def work(session: AsyncSession) -> None:
            for page_id, index in pages_to_update:
                await session.execute(
                    update(Page)
                    .where(Page.id == page_id, Page.app_version_id == version_id)
                    .values(index=index)
                )

        await db_transaction_for_version_update(self.session, version_id, work)
        logger.info(f"Reordered {len(pages_to_update)} pages in version {version_id}")

    # -------------------------------------------------------------------------
    # Clone
    # -------------------------------------------------------------------------

    async def clone_page(self, page_id: UUID, version_id: UUID) -> ClonePageResult:
        """
        Clone a page with its components, layouts and event handlers.

        The copy is inserted right after the source page; later pages are
        shifted down to keep the version's index dense.

        Returns:
            The version's refreshed pages and event handlers

        Raises:
            PageNotFoundError: If the source page is not in the version
        """

        async def work(session: AsyncSession) -> ClonePageResult:
            page_to_clone = await self.find_one(page_id)
            if not page_to_clone or page_to_clone.app_version_id != version_id:
                raise PageNotFoundError()

            all_pages = await self.list_version_pages(version_id)
            page_name, page_handle = clone_name_and_handle(
                page_to_clone.name, page_to_clone.handle, all_pages
            )

            new_index = page_to_clone.index + 1
            await session.execute(
                update(Page)
                .where(Page.app_version_id == version_id, Page.index >= new_index)
                .values(index=Page.index + 1)
            )

            cloned_page = Page(
                id=uuid4(),
                name=page_name,
                handle=page_handle,
                index=new_index,
                disabled=page_to_clone.disabled,
                hidden=page_to_clone.hidden,
                app_version_id=version_id,
            )
            session.add(cloned_page)
            await session.flush()

            await self.clone_page_events_and_components(page_id, cloned_page.id)

            pages = await self.find_pages_for_version(version_id)
            events = await self.events_service.find_events_for_version(version_id)
            logger.info(
                f"Cloned page '{page_to_clone.name}' ({page_id}) as '{page_name}' ({cloned_page.id})"
            )
            return ClonePageResult(
                pages=pages,
                events=[EventHandlerResponse.model_validate(e) for e in events],
            )

        return await db_transaction_for_version_update(self.session, version_id, work)

    async def clone_page_events_and_components(
        self,
        page_id: UUID,
        clone_page_id: UUID,
    ) -> dict[str, str]:
        """
        Deep copy the components, layouts and event handlers of a page.

        Components are cloned first so the id map is complete before any
        event payload is rewritten; parent links are fixed in a second pass.
        Cloned event handlers belong to the version of the clone page.

        Returns:
            Mapping of original component id to cloned component id

        Raises:
            PageNotFoundError: If the clone page does not exist
        """

        async def work(session: AsyncSession) -> dict[str, str]:
            clone_page = await self.find_one(clone_page_id)
            if not clone_page:
                raise PageNotFoundError()
            version_id = clone_page.app_version_id

            page_components = await self.components_service.get_page_components(page_id)
            page_events = await self.events_service.find_all_events_with_source_id(page_id)
            components_id_map: dict[str, str] = {}
            cloned_components: list[tuple[Component, Component]] = []

            # Clone components
            for component in page_components:
                new_component = Component(
                    id=uuid4(),
                    page_id=clone_page_id,
                    parent=component.parent,
                    name=component.name,
                    type=component.type,
                    properties=copy.deepcopy(component.properties),
                    styles=copy.deepcopy(component.styles),
                    general_properties=copy.deepcopy(component.general_properties),
                    validation=copy.deepcopy(component.validation),
                )
                session.add(new_component)
                components_id_map[str(component.id)] = str(new_component.id)
                cloned_components.append((component, new_component))
            await session.flush()

            # Clone layouts and component events
            layouts = await self.components_service.get_component_layouts(
                [c.id for c in page_components]
            )
            new_ids = {original.id: clone.id for original, clone in cloned_components}
            for layout in layouts:
                session.add(
                    Layout(
                        id=uuid4(),
                        component_id=new_ids[layout.component_id],
                        type=layout.type,
                        top=layout.top,
                        left=layout.left,
                        width=layout.width,
                        height=layout.height,
                    )
                )

            for original, clone in cloned_components:
                component_events = await self.events_service.find_all_events_with_source_id(
                    original.id
                )
                for event in component_events:
                    session.add(self._clone_event(event, clone.id, version_id, components_id_map))

            # Clone page events
            for event in page_events:
                session.add(self._clone_event(event, clone_page_id, version_id, components_id_map))

            # Resolve parents against the cloned components
            for original, clone in cloned_components:
                if original.parent is not None and original.parent in components_id_map:
                    clone.parent = components_id_map[original.parent]

            await session.flush()
            logger.info(
                f"Cloned {len(cloned_components)} components, {len(layouts)} layouts "
                f"from page {page_id} to {clone_page_id}"
            )
            return components_id_map

        return await db_transaction_wrap(self.session, work)

    @staticmethod
    def _clone_event(
        event: EventHandler,
        source_id: UUID,
        version_id: UUID,
        components_id_map: dict[str, str],
    ) -> EventHandler:
        return EventHandler(
            id=uuid4(),
            name=event.name,
            index=event.index,
            event=remap_event_definition(event.event, components_id_map),
            source_id=source_id,
            target=event.target,
            app_version_id=version_id,
        )

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    async def delete_page(self, page_id: UUID, version_id: UUID) -> None:
        """
        Delete a page and close the gap it leaves in the version's order.

        Raises:
            HomePageDeletionError: If the page is the home page
            PageNotFoundError: If the page is not in the version
            PageDeletionError: If no row was deleted
        """
        app = await self.apps_service.find_app_from_version(version_id)
        editing_version = app.editing_version

        async def work(session: AsyncSession) -> None:
            if editing_version and editing_version.home_page_id == page_id:
                raise HomePageDeletionError()

            page_exists = await self.find_one(page_id)
            if not page_exists or page_exists.app_version_id != version_id:
                raise PageNotFoundError()

            version = await self.apps_service.get_version(page_exists.app_version_id)
            if version and version.home_page_id == page_id:
                raise HomePageDeletionError()

            page_version_id = page_exists.app_version_id
            page_deleted_index = page_exists.index

            await self.events_service.cascade_delete_events(page_id)
            component_ids = (
                await session.execute(select(Component.id).where(Component.page_id == page_id))
            ).scalars().all()
            for component_id in component_ids:
                await self.events_service.cascade_delete_events(component_id)

            page_deleted = await session.execute(delete(Page).where(Page.id == page_id))
            if not page_deleted.rowcount:
                raise PageDeletionError()

            pages = await self.list_version_pages(page_version_id)
            rearranged = rearrange_pages_on_delete(pages, page_deleted_index)
            for page in pages:
                if page.id in rearranged:
                    page.index = rearranged[page.id]
            await session.flush()

            logger.info(
                f"Deleted page {page_id} from version {page_version_id}, "
                f"reindexed {len(rearranged)} pages"
            )

        await db_transaction_for_version_update(self.session, version_id, work)
