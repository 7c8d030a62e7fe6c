# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Photo gallery domain package."""

from school_portal.domains.gallery.service import (
    AlbumNotFoundError,
    GalleryService,
    GalleryServiceError,
    GalleryValidationError,
    ImageNotFoundError,
)

__all__ = [
    "GalleryService",
    "GalleryServiceError",
    "AlbumNotFoundError",
    "ImageNotFoundError",
    "GalleryValidationError",
]
