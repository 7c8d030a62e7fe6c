# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Centralized event type definitions for the school portal.

Using constants instead of string literals keeps publishers and
subscribers (including the public change stream) in agreement.
"""


class EventTypes:
    """All event types in the portal organized by domain."""

    class Post:
        """News post events."""

        CREATED = "post.created"
        UPDATED = "post.updated"
        DELETED = "post.deleted"

    class Menu:
        """Navigation menu events."""

        UPDATED = "menu.updated"

    class Config:
        """School configuration events."""

        UPDATED = "config.updated"

    class Visitor:
        """Visitor analytics events."""

        COUNTED = "visitor.counted"


class EventPatterns:
    """Wildcard patterns for subscribing to multiple events."""

    ALL_POST = "post.*"
    ALL_MENU = "menu.*"
    ALL_CONFIG = "config.*"
    ALL_VISITOR = "visitor.*"

    # Events pushed to connected browsers so they can refresh content
    PUBLIC_CHANGES = (ALL_POST, ALL_MENU, ALL_CONFIG)

    # Global wildcard
    ALL = "*"
