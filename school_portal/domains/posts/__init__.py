# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""News post domain package."""

from school_portal.domains.posts.drafting import (
    ContentDraftError,
    ContentDrafter,
    ContentDraftValidationError,
)
from school_portal.domains.posts.service import (
    PostNotFoundError,
    PostService,
    PostServiceError,
    PostValidationError,
    embed_youtube,
    to_post_response,
)

__all__ = [
    "PostService",
    "PostServiceError",
    "PostNotFoundError",
    "PostValidationError",
    "embed_youtube",
    "to_post_response",
    "ContentDrafter",
    "ContentDraftError",
    "ContentDraftValidationError",
]
