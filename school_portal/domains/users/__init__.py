# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Account administration domain package."""

from school_portal.domains.users.service import (
    UserNotFoundError,
    UserService,
    UserServiceError,
    UserValidationError,
)

__all__ = ["UserService", "UserServiceError", "UserNotFoundError", "UserValidationError"]
