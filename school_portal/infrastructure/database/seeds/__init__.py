# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Seed data for a fresh portal database."""

from school_portal.infrastructure.database.seeds.portal import seed_portal_database

__all__ = ["seed_portal_database"]
