# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School configuration endpoints (administrators only).

- GET / - Current configuration (fallback values until first save)
- PUT / - Save configuration
"""

import logging

from fastapi import APIRouter, Depends

from school_portal.api.dependencies import get_site_config_service, require_admin
from school_portal.api.middleware.auth import CurrentUser
from school_portal.domains.site_config import SiteConfigService
from school_portal.models.site import SchoolConfigSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=SchoolConfigSchema, summary="Get configuration")
async def get_config(
    current_user: CurrentUser = Depends(require_admin),
    service: SiteConfigService = Depends(get_site_config_service),
) -> SchoolConfigSchema:
    """Get the school configuration."""
    return await service.get_config()


@router.put("", response_model=SchoolConfigSchema, summary="Save configuration")
async def save_config(
    data: SchoolConfigSchema,
    current_user: CurrentUser = Depends(require_admin),
    service: SiteConfigService = Depends(get_site_config_service),
) -> SchoolConfigSchema:
    """Save the school configuration."""
    logger.info("Saving school configuration by=%s", current_user.id)
    return await service.save_config(data)
