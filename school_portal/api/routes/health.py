# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Health check endpoints.

This module provides liveness and readiness endpoints for the API.
"""

import logging
import time
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel, Field

from school_portal import __version__
from school_portal.core.config import get_settings
from school_portal.infrastructure.database.connection import check_database_connection

logger = logging.getLogger(__name__)

router = APIRouter()

# Track server start time for uptime calculation
_server_start_time = time.time()


class ComponentHealth(BaseModel):
    """Individual component health status."""
    status: str = Field(description="Component status")
    latency_ms: float | None = Field(None, description="Response latency in ms")
    message: str | None = Field(None, description="Additional status message")


class HealthResponse(BaseModel):
    """Liveness response model."""
    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(description="Current server timestamp")
    version: str = Field(description="API version")
    environment: str = Field(description="Deployment environment")
    uptime_seconds: int = Field(description="Server uptime in seconds")


class ReadinessResponse(BaseModel):
    """Readiness response model."""
    status: str = Field(description="healthy, degraded or unhealthy")
    ready: bool = Field(description="Whether the service is ready")
    components: dict[str, ComponentHealth] = Field(default_factory=dict)


async def check_database() -> ComponentHealth:
    """Check the PostgreSQL connection with ``SELECT 1``."""
    start = time.time()
    healthy = await check_database_connection()
    latency = round((time.time() - start) * 1000, 2)
    if healthy:
        return ComponentHealth(status="healthy", latency_ms=latency)
    logger.error("Database health check failed")
    return ComponentHealth(status="unhealthy", latency_ms=latency, message="Database unreachable")


def overall_status(components: dict[str, ComponentHealth]) -> str:
    """Fold component statuses into one."""
    statuses = [c.status for c in components.values()]
    if all(s == "healthy" for s in statuses):
        return "healthy"
    if all(s == "unhealthy" for s in statuses):
        return "unhealthy"
    return "degraded"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report that the process is alive."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment,
        uptime_seconds=int(time.time() - _server_start_time),
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """Check whether the API can serve traffic.

    Returns:
        ReadinessResponse with per-component results.
    """
    components = {"database": await check_database()}
    status = overall_status(components)
    return ReadinessResponse(status=status, ready=status == "healthy", components=components)
