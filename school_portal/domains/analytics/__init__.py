# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Visitor analytics domain package.

Provides visit tracking with once-per-day counting, online presence and
the day/month counter reset rule.
"""

from school_portal.domains.analytics.service import (
    COUNTER_KEYS,
    Counters,
    VisitorService,
    increment,
    roll_over,
)

__all__ = [
    "COUNTER_KEYS",
    "Counters",
    "VisitorService",
    "increment",
    "roll_over",
]
