# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic API schemas.

All schemas speak camelCase on the wire and snake_case in Python.
"""
