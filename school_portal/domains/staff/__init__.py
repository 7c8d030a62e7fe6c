# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Staff directory domain package."""

from school_portal.domains.staff.service import (
    StaffNotFoundError,
    StaffService,
    StaffServiceError,
    StaffValidationError,
)

__all__ = ["StaffService", "StaffServiceError", "StaffNotFoundError", "StaffValidationError"]
