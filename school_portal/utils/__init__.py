# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for the school portal.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations and local date buckets
- text: Slugs, tags and YouTube link helpers
"""

from school_portal.utils.datetime import (
    ensure_utc,
    local_date_int,
    local_month_int,
    parse_issue_date,
    to_local,
    utc_now,
)
from school_portal.utils.logging import bind_context, clear_context, get_logger, setup_logging
from school_portal.utils.text import (
    draft_to_html,
    extract_youtube_id,
    is_persisted_id,
    make_summary,
    parse_tags,
    slugify,
    youtube_embed_html,
)

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "ensure_utc",
    "to_local",
    "local_date_int",
    "local_month_int",
    "parse_issue_date",
    # Text
    "slugify",
    "parse_tags",
    "is_persisted_id",
    "extract_youtube_id",
    "youtube_embed_html",
    "draft_to_html",
    "make_summary",
]
