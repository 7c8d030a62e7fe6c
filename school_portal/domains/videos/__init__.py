# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Video library domain package."""

from school_portal.domains.videos.service import (
    VideoNotFoundError,
    VideoService,
    VideoServiceError,
    VideoValidationError,
)

__all__ = ["VideoService", "VideoServiceError", "VideoNotFoundError", "VideoValidationError"]
