# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial portal database schema.

Revision ID: 001_portal_initial
Revises: None
Create Date: 2025-01-06

This migration creates all portal tables based on the SQLAlchemy models
in school_portal/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_portal_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column("id", sa.String(36), primary_key=True)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def _updated_at() -> sa.Column:
    return sa.Column(
        "updated_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def upgrade() -> None:
    """Create portal tables."""
    # ==========================================================================
    # 1. school_config table
    # ==========================================================================
    op.create_table(
        "school_config",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slogan", sa.String(255), nullable=True),
        sa.Column("logo_url", sa.Text, nullable=True),
        sa.Column("favicon_url", sa.Text, nullable=True),
        sa.Column("banner_url", sa.Text, nullable=True),
        sa.Column("banner_height", sa.Integer, nullable=False, server_default="400"),
        sa.Column("principal_name", sa.String(255), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("hotline", sa.String(50), nullable=True),
        sa.Column("map_url", sa.Text, nullable=True),
        sa.Column("facebook", sa.Text, nullable=True),
        sa.Column("youtube", sa.Text, nullable=True),
        sa.Column("zalo", sa.Text, nullable=True),
        sa.Column("website", sa.Text, nullable=True),
        sa.Column("show_welcome_banner", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("home_news_count", sa.Integer, nullable=False, server_default="6"),
        sa.Column("home_show_program", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("primary_color", sa.String(50), nullable=True),
        sa.Column("title_color", sa.String(50), nullable=True),
        sa.Column("title_shadow_color", sa.String(50), nullable=True),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.Text, nullable=True),
        sa.Column("footer_links", sa.JSON, nullable=False, server_default="[]"),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "banner_height BETWEEN 200 AND 800",
            name="valid_banner_height",
        ),
    )

    # ==========================================================================
    # 2. categories table
    # ==========================================================================
    op.create_table(
        "categories",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("module_type", sa.String(20), nullable=False, server_default="news"),
        sa.Column(
            "parent_id",
            sa.String(36),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
        sa.UniqueConstraint("module_type", "slug", name="uq_categories_module_slug"),
        sa.CheckConstraint(
            "module_type IN ('news', 'documents', 'files')",
            name="valid_category_module_type",
        ),
    )

    # ==========================================================================
    # 3. posts table
    # ==========================================================================
    op.create_table(
        "posts",
        _id_column(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("slug", sa.String(500), nullable=False),
        sa.Column("summary", sa.Text, nullable=True),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("thumbnail", sa.Text, nullable=True),
        sa.Column("image_caption", sa.String(500), nullable=True),
        sa.Column("author", sa.String(255), nullable=True),
        sa.Column(
            "date",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("category", sa.String(255), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="draft"),
        sa.Column("views", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("show_on_home", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("block_ids", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("tags", sa.JSON, nullable=False, server_default="[]"),
        sa.Column("attachments", sa.JSON, nullable=False, server_default="[]"),
        _created_at(),
        _updated_at(),
        sa.CheckConstraint(
            "status IN ('published', 'draft')",
            name="valid_post_status",
        ),
    )
    op.create_index("ix_posts_status_date", "posts", ["status", "date"])
    op.create_index("ix_posts_slug", "posts", ["slug"])

    # ==========================================================================
    # 4. documents table
    # ==========================================================================
    op.create_table(
        "documents",
        _id_column(),
        sa.Column("number", sa.String(100), nullable=True),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("date", sa.String(20), nullable=True),
        sa.Column("issued_on", sa.Date, nullable=True),
        sa.Column(
            "category_id",
            sa.String(36),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("download_url", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_index("ix_documents_issued_on", "documents", ["issued_on"])

    # ==========================================================================
    # 5. display_blocks table
    # ==========================================================================
    op.create_table(
        "display_blocks",
        _id_column(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(20), nullable=False, server_default="main"),
        sa.Column("type", sa.String(20), nullable=False, server_default="grid"),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("item_count", sa.Integer, nullable=False, server_default="5"),
        sa.Column("is_visible", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("html_content", sa.Text, nullable=True),
        sa.Column("target_page", sa.String(20), nullable=False, server_default="all"),
        sa.Column("custom_color", sa.String(50), nullable=True),
        sa.Column("custom_text_color", sa.String(50), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "position IN ('main', 'sidebar')",
            name="valid_block_position",
        ),
    )

    # ==========================================================================
    # 6. staff_members table
    # ==========================================================================
    op.create_table(
        "staff_members",
        _id_column(),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=True),
        sa.Column("party_date", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text, nullable=True),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        _created_at(),
    )

    # ==========================================================================
    # 7. menu_items table
    # ==========================================================================
    op.create_table(
        "menu_items",
        _id_column(),
        sa.Column("label", sa.String(255), nullable=False),
        sa.Column("path", sa.String(500), nullable=False),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        _created_at(),
    )

    # ==========================================================================
    # 8. gallery tables
    # ==========================================================================
    op.create_table(
        "gallery_albums",
        _id_column(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("thumbnail", sa.Text, nullable=True),
        sa.Column("created_date", sa.Date, nullable=True),
        _created_at(),
    )
    op.create_table(
        "gallery_images",
        _id_column(),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("caption", sa.String(500), nullable=True),
        sa.Column(
            "album_id",
            sa.String(36),
            sa.ForeignKey("gallery_albums.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
    )
    op.create_index("ix_gallery_images_album_id", "gallery_images", ["album_id"])

    # ==========================================================================
    # 9. videos table
    # ==========================================================================
    op.create_table(
        "videos",
        _id_column(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("youtube_url", sa.Text, nullable=False),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        _created_at(),
    )

    # ==========================================================================
    # 10. school_introductions table
    # ==========================================================================
    op.create_table(
        "school_introductions",
        _id_column(),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("slug", sa.String(500), unique=True, nullable=False),
        sa.Column("content", sa.Text, nullable=True),
        sa.Column("image_url", sa.Text, nullable=True),
        sa.Column("order_index", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_visible", sa.Boolean, nullable=False, server_default=sa.true()),
        _created_at(),
    )

    # ==========================================================================
    # 11. user_profiles table
    # ==========================================================================
    op.create_table(
        "user_profiles",
        _id_column(),
        sa.Column("username", sa.String(100), unique=True, nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="member"),
        sa.Column("avatar_url", sa.Text, nullable=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.CheckConstraint(
            "role IN ('admin', 'editor', 'member')",
            name="valid_user_role",
        ),
    )
    op.create_index("ix_user_profiles_email", "user_profiles", ["email"])

    # ==========================================================================
    # 12. visitor analytics tables
    # ==========================================================================
    op.create_table(
        "visitor_logs",
        _id_column(),
        sa.Column("session_id", sa.String(64), unique=True, nullable=False),
        sa.Column(
            "last_active",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.Column("last_counted_date", sa.Integer, nullable=True),
    )
    op.create_index("ix_visitor_logs_last_active", "visitor_logs", ["last_active"])

    op.create_table(
        "site_counters",
        sa.Column("key", sa.String(50), primary_key=True),
        sa.Column("value", sa.BigInteger, nullable=False, server_default="0"),
    )


def downgrade() -> None:
    """Drop portal tables."""
    op.drop_table("site_counters")
    op.drop_index("ix_visitor_logs_last_active", table_name="visitor_logs")
    op.drop_table("visitor_logs")
    op.drop_index("ix_user_profiles_email", table_name="user_profiles")
    op.drop_table("user_profiles")
    op.drop_table("school_introductions")
    op.drop_table("videos")
    op.drop_index("ix_gallery_images_album_id", table_name="gallery_images")
    op.drop_table("gallery_images")
    op.drop_table("gallery_albums")
    op.drop_table("menu_items")
    op.drop_table("staff_members")
    op.drop_table("display_blocks")
    op.drop_index("ix_documents_issued_on", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_posts_slug", table_name="posts")
    op.drop_index("ix_posts_status_date", table_name="posts")
    op.drop_table("posts")
    op.drop_table("categories")
    op.drop_table("school_config")
