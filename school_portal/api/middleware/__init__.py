# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

This package provides middleware for request processing:
- AuthMiddleware: JWT authentication.
- RequestLoggingMiddleware: Request id binding and access logging.
- limiter: slowapi rate limiter shared by the routes.
"""

from school_portal.api.middleware.auth import AuthMiddleware, CurrentUser
from school_portal.api.middleware.logging import RequestLoggingMiddleware
from school_portal.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler

__all__ = [
    "AuthMiddleware",
    "CurrentUser",
    "RequestLoggingMiddleware",
    "limiter",
    "rate_limit_exceeded_handler",
]
