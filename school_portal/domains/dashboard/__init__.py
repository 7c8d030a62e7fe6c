# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admin dashboard domain package."""

from school_portal.domains.dashboard.service import DashboardService

__all__ = ["DashboardService"]
