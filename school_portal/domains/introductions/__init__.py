# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Introduction pages domain package."""

from school_portal.domains.introductions.service import (
    IntroductionNotFoundError,
    IntroductionService,
    IntroductionServiceError,
    IntroductionSlugExistsError,
)

__all__ = [
    "IntroductionService",
    "IntroductionServiceError",
    "IntroductionNotFoundError",
    "IntroductionSlugExistsError",
]
