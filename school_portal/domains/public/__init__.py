# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public site composition package."""

from school_portal.domains.public.service import (
    NON_POST_TYPES,
    PublicNotFoundError,
    PublicServiceError,
    PublicSiteService,
    build_share_links,
)

__all__ = [
    "NON_POST_TYPES",
    "PublicSiteService",
    "PublicServiceError",
    "PublicNotFoundError",
    "build_share_links",
]
