# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services of the school portal.

Each subpackage exposes a service class constructed with an AsyncSession
and its own exception hierarchy that the API layer maps to HTTP errors.
"""
