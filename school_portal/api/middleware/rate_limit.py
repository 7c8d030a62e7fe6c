# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Rate limiting using slowapi.

Limits are kept in process memory and applied per client (user ID when
signed in, IP address otherwise). Sign-in, registration and the visit
heartbeat carry tighter limits of their own.

Example:
    @router.post("/login")
    @limiter.limit(settings.rate_limit.auth, key_func=get_ip_only)
    async def login(request: Request, ...):
        ...
"""

import logging

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from school_portal.core.config import get_settings

logger = logging.getLogger(__name__)


def get_client_identifier(request: Request) -> str:
    """Get a unique identifier for the client.

    Uses user ID if authenticated, otherwise the IP address.
    """
    user = getattr(request.state, "user", None)
    if user:
        return f"user:{user.id}"
    return f"ip:{get_remote_address(request)}"


def get_ip_only(request: Request) -> str:
    """Get client IP address only.

    Used for sign-in and heartbeat endpoints where the user is anonymous.
    """
    return get_remote_address(request)


settings = get_settings()
limiter = Limiter(
    key_func=get_client_identifier,
    default_limits=[f"{settings.rate_limit.requests_per_minute}/minute"],
    storage_uri="memory://",
    enabled=settings.rate_limit.enabled,
)

RATE_LIMIT_AUTH = settings.rate_limit.auth
RATE_LIMIT_TRACK_VISIT = settings.rate_limit.track_visit


async def rate_limit_exceeded_handler(
    request: Request,
    exc: RateLimitExceeded,
) -> Response:
    """Handle rate limit exceeded errors.

    Returns a 429 Too Many Requests response with retry information.

    Args:
        request: HTTP request.
        exc: Rate limit exceeded exception.

    Returns:
        JSON response with error details.
    """
    logger.warning(
        "Rate limit exceeded: %s for %s",
        exc.detail,
        get_client_identifier(request),
    )

    return Response(
        content='{"detail": "Too many requests. Please try again later."}',
        status_code=429,
        media_type="application/json",
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )
