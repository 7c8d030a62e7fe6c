# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin dashboard and visitor maintenance endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from school_portal.api.dependencies import (
    get_dashboard_service,
    get_visitor_service,
    require_admin,
    require_editor,
)
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.analytics import VisitorService
from school_portal.domains.dashboard import DashboardService
from school_portal.models.analytics import DashboardStats
from school_portal.models.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=DashboardStats, summary="Dashboard summary")
async def get_dashboard(
    current_user: CurrentUser = Depends(require_editor),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStats:
    """Content counts, views per category, latest posts and visitors."""
    return await service.get_stats()


@router.delete("/visitor-logs", response_model=MessageResponse, summary="Prune visitor logs")
async def prune_visitor_logs(
    older_than_days: Annotated[int, Query(alias="olderThanDays", ge=1, le=3650)] = 30,
    current_user: CurrentUser = Depends(require_admin),
    service: VisitorService = Depends(get_visitor_service),
) -> MessageResponse:
    """Delete heartbeat rows older than the given number of days."""
    removed = await service.prune_visitor_logs(older_than_days=older_than_days)
    return MessageResponse(message=f"Removed {removed} visitor logs")
