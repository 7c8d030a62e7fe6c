# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Category domain package."""

from school_portal.domains.categories.service import (
    CategoryNotFoundError,
    CategoryService,
    CategoryServiceError,
    CategorySlugExistsError,
)

__all__ = [
    "CategoryService",
    "CategoryServiceError",
    "CategoryNotFoundError",
    "CategorySlugExistsError",
]
