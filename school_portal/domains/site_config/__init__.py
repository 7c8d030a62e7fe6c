# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School configuration domain package."""

from school_portal.domains.site_config.service import FALLBACK_CONFIG, SiteConfigService

__all__ = [
    "FALLBACK_CONFIG",
    "SiteConfigService",
]
