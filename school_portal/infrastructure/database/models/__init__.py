# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models for the portal database."""

from school_portal.infrastructure.database.models.analytics import SiteCounter, VisitorLog
from school_portal.infrastructure.database.models.base import Base, new_id
from school_portal.infrastructure.database.models.content import (
    Category,
    Document,
    Post,
    SchoolIntroduction,
)
from school_portal.infrastructure.database.models.media import GalleryAlbum, GalleryImage, Video
from school_portal.infrastructure.database.models.people import StaffMember, UserProfile
from school_portal.infrastructure.database.models.site import DisplayBlock, MenuItem, SchoolConfig

__all__ = [
    "Base",
    "new_id",
    # Site
    "SchoolConfig",
    "MenuItem",
    "DisplayBlock",
    # Content
    "Category",
    "Post",
    "Document",
    "SchoolIntroduction",
    # Media
    "GalleryAlbum",
    "GalleryImage",
    "Video",
    # People
    "StaffMember",
    "UserProfile",
    # Analytics
    "VisitorLog",
    "SiteCounter",
]
