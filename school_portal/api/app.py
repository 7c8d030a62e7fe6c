# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the school portal API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded

from school_portal import __version__
from school_portal.api.dependencies import close_db, init_db
from school_portal.api.middleware import (
    AuthMiddleware,
    RequestLoggingMiddleware,
    limiter,
    rate_limit_exceeded_handler,
)
from school_portal.api.routes import health
from school_portal.api.v1 import router as v1_router
from school_portal.core.config import get_settings
from school_portal.domains.auth.jwt import JWTManager
from school_portal.domains.auth.password import PasswordHasher
from school_portal.domains.auth.service import AuthService
from school_portal.infrastructure.database.connection import get_session
from school_portal.infrastructure.database.seeds import seed_portal_database
from school_portal.infrastructure.storage import LocalStorageBackend, get_storage
from school_portal.utils.logging import setup_logging

logger = logging.getLogger(__name__)


async def seed_defaults() -> None:
    """Create the first administrator and the default portal rows."""
    settings = get_settings()
    async with get_session() as session:
        auth_service = AuthService(session, JWTManager(settings.jwt), PasswordHasher())
        created = await auth_service.ensure_default_admin(
            email=settings.admin.email,
            password=settings.admin.password.get_secret_value(),
            full_name=settings.admin.full_name,
        )
        if not created:
            logger.info("Administrator already exists, skipping admin seed")
        await seed_portal_database(session)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.
    Initializes and cleans up:
    - Logging
    - Database connections
    - Default administrator and portal rows

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting school portal API (environment=%s, debug=%s)",
        settings.environment,
        settings.debug,
    )

    # =========================================================================
    # Startup
    # =========================================================================

    try:
        await init_db()
        logger.info("Database connection initialized")
    except Exception as e:
        logger.warning("Failed to initialize database connection: %s", str(e))

    try:
        await seed_defaults()
    except Exception as e:
        logger.warning("Failed to seed initial data: %s", str(e))

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await close_db()
        logger.info("Database connection closed")
    except Exception as e:
        logger.warning("Error closing database connection: %s", str(e))

    logger.info("Shutting down school portal API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="School Portal API",
        description="School website and content management backend",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        # This prevents 307 redirects that lose Authorization headers
        redirect_slashes=False,
    )

    # =========================================================================
    # State
    # =========================================================================
    app.state.limiter = limiter

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================

    # Auth middleware - validates JWT tokens
    app.add_middleware(AuthMiddleware)

    # Request logging - binds the request id for every log line
    app.add_middleware(RequestLoggingMiddleware)

    # CORS middleware (added last so it executes first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    # Uploaded files are served directly when stored on local disk
    storage = get_storage()
    if isinstance(storage, LocalStorageBackend):
        storage.root.mkdir(parents=True, exist_ok=True)
        app.mount(
            settings.storage.public_base_url,
            StaticFiles(directory=storage.root),
            name="media",
        )

    return app
