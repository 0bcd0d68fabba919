"""store builder: stores, pages, sections, themes, navigation, templates

Revision ID: 0001_store_builder
Revises:
Create Date: 2026-01-05 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '0001_store_builder'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON = sa.JSON(none_as_null=True).with_variant(postgresql.JSONB(astext_type=sa.Text(), none_as_null=True), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        "stores",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("slug", sa.String(length=80), nullable=False),
        sa.Column("name", sa.String(length=160), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("business_type", sa.String(length=64), nullable=False, server_default="ecommerce"),
        sa.Column("business_category", sa.String(length=64), nullable=True, server_default="general"),
        *_timestamps(),
    )
    op.create_index("ix_stores_slug", "stores", ["slug"], unique=True)

    op.create_table(
        "store_members",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False, server_default="editor"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.UniqueConstraint("store_id", "user_id", name="uq_store_member"),
    )
    op.create_index("ix_store_members_store_id", "store_members", ["store_id"])
    op.create_index("ix_store_members_user_id", "store_members", ["user_id"])

    op.create_table(
        "store_pages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=128), nullable=False),
        sa.Column("page_type", sa.String(length=32), nullable=False, server_default="custom"),
        sa.Column("seo_title", sa.String(length=200), nullable=True),
        sa.Column("seo_description", sa.Text(), nullable=True),
        sa.Column("og_image_url", sa.String(length=1024), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("show_header", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("show_footer", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint("store_id", "slug", name="uq_store_page_slug"),
    )
    op.create_index("ix_store_pages_store_id", "store_pages", ["store_id"])
    op.create_index("ix_store_pages_store_published", "store_pages", ["store_id", "is_published"])

    op.create_table(
        "page_sections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("store_pages.id", ondelete="CASCADE"), nullable=False),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("section_type", sa.String(length=64), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("config", JSON, nullable=False),
        sa.Column("mobile_config", JSON, nullable=True),
        sa.Column("is_visible", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_page_sections_page_id", "page_sections", ["page_id"])
    op.create_index("ix_page_sections_store_id", "page_sections", ["store_id"])
    op.create_index("ix_page_sections_page_order", "page_sections", ["page_id", "sort_order"])

    op.create_table(
        "store_themes",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=128), nullable=False, server_default="Default Theme"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("colors", JSON, nullable=False),
        sa.Column("typography", JSON, nullable=False),
        sa.Column("layout", JSON, nullable=False),
        sa.Column("custom_css", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_store_themes_store_id", "store_themes", ["store_id"])
    # Only one active theme per store
    op.create_index(
        "uq_store_themes_one_active",
        "store_themes",
        ["store_id"],
        unique=True,
        postgresql_where=sa.text("is_active"),
        sqlite_where=sa.text("is_active = 1"),
    )

    op.create_table(
        "store_navigation",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("label", sa.String(length=160), nullable=False),
        sa.Column("url", sa.String(length=1024), nullable=True),
        sa.Column("page_id", sa.Integer(), sa.ForeignKey("store_pages.id", ondelete="SET NULL"), nullable=True),
        sa.Column("location", sa.String(length=16), nullable=False, server_default="header"),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("store_navigation.id", ondelete="CASCADE"), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_highlighted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("open_in_new_tab", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_store_navigation_store_id", "store_navigation", ["store_id"])
    op.create_index("ix_store_navigation_parent_id", "store_navigation", ["parent_id"])
    op.create_index("ix_store_navigation_store_location", "store_navigation", ["store_id", "location"])

    op.create_table(
        "store_header_footer",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("store_id", sa.Integer(), sa.ForeignKey("stores.id", ondelete="CASCADE"), nullable=False),
        sa.Column("header_config", JSON, nullable=False),
        sa.Column("footer_config", JSON, nullable=False),
        sa.Column("social_links", JSON, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("store_id", name="uq_store_header_footer_store_id"),
    )

    op.create_table(
        "page_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("business_type", sa.String(length=64), nullable=False),
        sa.Column("business_category", sa.String(length=64), nullable=True),
        sa.Column("page_type", sa.String(length=32), nullable=False),
        sa.Column("template_name", sa.String(length=160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("default_sections", JSON, nullable=False),
        sa.Column("default_title", sa.String(length=200), nullable=True),
        sa.Column("default_slug", sa.String(length=128), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("preview_image_url", sa.String(length=1024), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint(
            "business_type", "business_category", "page_type", "template_name",
            name="uq_page_template_per_business",
        ),
    )
    op.create_index(
        "ix_page_templates_business", "page_templates", ["business_type", "business_category", "is_active"]
    )


def downgrade():
    op.drop_index("ix_page_templates_business", table_name="page_templates")
    op.drop_table("page_templates")

    op.drop_table("store_header_footer")

    op.drop_index("ix_store_navigation_store_location", table_name="store_navigation")
    op.drop_index("ix_store_navigation_parent_id", table_name="store_navigation")
    op.drop_index("ix_store_navigation_store_id", table_name="store_navigation")
    op.drop_table("store_navigation")

    op.drop_index("uq_store_themes_one_active", table_name="store_themes")
    op.drop_index("ix_store_themes_store_id", table_name="store_themes")
    op.drop_table("store_themes")

    op.drop_index("ix_page_sections_page_order", table_name="page_sections")
    op.drop_index("ix_page_sections_store_id", table_name="page_sections")
    op.drop_index("ix_page_sections_page_id", table_name="page_sections")
    op.drop_table("page_sections")

    op.drop_index("ix_store_pages_store_published", table_name="store_pages")
    op.drop_index("ix_store_pages_store_id", table_name="store_pages")
    op.drop_table("store_pages")

    op.drop_index("ix_store_members_user_id", table_name="store_members")
    op.drop_index("ix_store_members_store_id", table_name="store_members")
    op.drop_table("store_members")

    op.drop_index("ix_stores_slug", table_name="stores")
    op.drop_table("stores")
