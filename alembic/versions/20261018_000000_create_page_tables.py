"""Create application, version, page, component, layout and event handler tables.

Revision ID: 20261018_000000
Revises:
Create Date: 2026-10-18

- apps / app_versions: versioned containers, home_page_id per version
- pages: ordered by a dense index within their version
- components: tree stored as a parent id string per row
- layouts: one row per component and device type
- event_handlers: actions owned by a page or component (source_id, no FK)
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_000000"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "apps",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "app_versions",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("app_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("home_page_id", sa.Uuid(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["app_id"], ["apps.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_app_versions_app_id", "app_versions", ["app_id"])

    op.create_table(
        "pages",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("handle", sa.String(255), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("hidden", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("app_version_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["app_version_id"], ["app_versions.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_pages_app_version_id", "pages", ["app_version_id"])

    op.create_table(
        "components",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("page_id", sa.Uuid(), nullable=False),
        sa.Column("parent", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("properties", postgresql.JSONB(), server_default="{}", nullable=False),
        sa.Column("styles", postgresql.JSONB(), server_default="{}", nullable=False),
        sa.Column("general_properties", postgresql.JSONB(), server_default="{}", nullable=False),
        sa.Column("validation", postgresql.JSONB(), server_default="{}", nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["page_id"], ["pages.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_components_page_id", "components", ["page_id"])

    op.create_table(
        "layouts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("component_id", sa.Uuid(), nullable=False),
        sa.Column("type", sa.String(20), nullable=False, server_default="desktop"),
        sa.Column("top", sa.Float(), nullable=False, server_default="0"),
        sa.Column("left", sa.Float(), nullable=False, server_default="0"),
        sa.Column("width", sa.Float(), nullable=False, server_default="0"),
        sa.Column("height", sa.Float(), nullable=False, server_default="0"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["component_id"], ["components.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_layouts_component_id", "layouts", ["component_id"])

    op.create_table(
        "event_handlers",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("index", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("event", postgresql.JSONB(), server_default="{}", nullable=False),
        sa.Column("source_id", sa.Uuid(), nullable=False),
        sa.Column("target", sa.String(50), nullable=False),
        sa.Column("app_version_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["app_version_id"], ["app_versions.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_event_handlers_source_id", "event_handlers", ["source_id"])
    op.create_index("ix_event_handlers_app_version_id", "event_handlers", ["app_version_id"])


def downgrade() -> None:
    op.drop_index("ix_event_handlers_app_version_id", table_name="event_handlers")
    op.drop_index("ix_event_handlers_source_id", table_name="event_handlers")
    op.drop_table("event_handlers")
    op.drop_index("ix_layouts_component_id", table_name="layouts")
    op.drop_table("layouts")
    op.drop_index("ix_components_page_id", table_name="components")
    op.drop_table("components")
    op.drop_index("ix_pages_app_version_id", table_name="pages")
    op.drop_table("pages")
    op.drop_index("ix_app_versions_app_id", table_name="app_versions")
    op.drop_table("app_versions")
    op.drop_table("apps")
