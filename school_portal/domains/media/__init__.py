# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Media upload domain package."""

from school_portal.domains.media.service import (
    ALLOWED_CONTENT_TYPES,
    MediaService,
    MediaServiceError,
    MediaStorageError,
    MediaValidationError,
    build_object_path,
    safe_filename,
)

__all__ = [
    "ALLOWED_CONTENT_TYPES",
    "MediaService",
    "MediaServiceError",
    "MediaStorageError",
    "MediaValidationError",
    "build_object_path",
    "safe_filename",
]
