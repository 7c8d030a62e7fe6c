# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication domain services.

Exports:
    PasswordHasher: Password policy and bcrypt hashing.
    JWTManager: JWT token creation and validation.
    AuthService: Registration, sign-in and token refresh.
"""

from school_portal.domains.auth.jwt import JWTManager
from school_portal.domains.auth.password import PasswordHasher, WeakPasswordError
from school_portal.domains.auth.service import AuthService

__all__ = [
    "PasswordHasher",
    "WeakPasswordError",
    "JWTManager",
    "AuthService",
]
