# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document library domain package."""

from school_portal.domains.documents.service import (
    DocumentNotFoundError,
    DocumentService,
    DocumentServiceError,
    DocumentValidationError,
)

__all__ = [
    "DocumentService",
    "DocumentServiceError",
    "DocumentNotFoundError",
    "DocumentValidationError",
]
