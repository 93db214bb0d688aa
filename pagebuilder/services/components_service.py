"""
Components Service

Read access to the components of a page:
- Reconstruct the component tree from flat rows (parent references)
- Attach layout rows to each component
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from pagebuilder.models.contracts.pages import ComponentTreeNode, LayoutResponse
from pagebuilder.models.orm.pages import Component, Layout

logger = logging.getLogger(__name__)


def build_component_tree(
    components: list[Component],
    layouts: list[Layout] | None = None,
) -> list[ComponentTreeNode]:
    """
    Build a tree of ComponentTreeNode from flat component rows.

    Uses a single pass with a lookup dict to build the tree efficiently.
    Components whose parent is not on the page are returned as roots so
    they stay visible to the editor.
    """
    if not components:
        return []

    layouts_by_component: dict[UUID, list[LayoutResponse]] = {}
    for layout in layouts or []:
        layouts_by_component.setdefault(layout.component_id, []).append(
            LayoutResponse.model_validate(layout)
        )

    nodes: dict[str, ComponentTreeNode] = {}
    root_nodes: list[ComponentTreeNode] = []

    # First pass: create all nodes
    for comp in components:
        nodes[str(comp.id)] = ComponentTreeNode(
            id=comp.id,
            name=comp.name,
            type=comp.type,
            parent=comp.parent,
            properties=comp.properties or {},
            styles=comp.styles or {},
            general_properties=comp.general_properties or {},
            validation=comp.validation or {},
            layouts=layouts_by_component.get(comp.id, []),
            children=[],
        )

    # Second pass: build tree structure
    for comp in components:
        node = nodes[str(comp.id)]
        if comp.parent is not None and comp.parent in nodes:
            nodes[comp.parent].children.append(node)
        else:
            root_nodes.append(node)

    return root_nodes


class ComponentsService:
    """Service for component reads."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_page_components(self, page_id: UUID) -> list[Component]:
        """Get the flat component rows of a page in creation order."""
        query = (
            select(Component)
            .where(Component.page_id == page_id)
            .order_by(Component.created_at, Component.id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_component_layouts(self, component_ids: list[UUID]) -> list[Layout]:
        """Get the layout rows of several components."""
        if not component_ids:
            return []
        query = select(Layout).where(Layout.component_id.in_(component_ids))
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_all_components(self, page_id: UUID) -> list[ComponentTreeNode]:
        """Get the component tree of a page, with layouts attached."""
        components = await self.get_page_components(page_id)
        layouts = await self.get_component_layouts([c.id for c in components])
        return build_component_tree(components, layouts)
