# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Schemas for visitor counters and the admin dashboard."""

from pydantic import Field

from school_portal.models.common import CamelModel
from school_portal.models.content import PostResponse


class VisitorStats(CamelModel):
    """Counters displayed in the stats widget."""

    total: int = 0
    today: int = 0
    month: int = 0
    online: int = 1


class TrackVisitRequest(CamelModel):
    """Heartbeat sent by a browser session."""

    session_id: str = Field(..., min_length=1, max_length=64)


class TrackVisitResponse(CamelModel):
    """Outcome of a heartbeat."""

    tracked: bool
    counted: bool = False


class CategoryViews(CamelModel):
    """Accumulated post views for one category."""

    category: str
    name: str
    views: int


class DashboardStats(CamelModel):
    """Admin dashboard summary."""

    total_views: int
    post_count: int
    published_count: int
    draft_count: int
    document_count: int
    staff_count: int
    user_count: int
    views_by_category: list[CategoryViews] = Field(default_factory=list)
    latest_posts: list[PostResponse] = Field(default_factory=list)
    visitors: VisitorStats = Field(default_factory=VisitorStats)
