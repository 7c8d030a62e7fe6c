# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Navigation menu domain package."""

from school_portal.domains.menu.service import (
    SYSTEM_PATHS,
    MenuItemNotFoundError,
    MenuService,
    MenuServiceError,
    MenuValidationError,
    is_valid_menu_path,
    system_paths,
)

__all__ = [
    "SYSTEM_PATHS",
    "MenuService",
    "MenuServiceError",
    "MenuItemNotFoundError",
    "MenuValidationError",
    "is_valid_menu_path",
    "system_paths",
]
