# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Run the school portal API server.

Usage:
    python -m school_portal
    school-portal
"""

import logging

import uvicorn

from school_portal.core.config import get_settings
from school_portal.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Start uvicorn with the configured host, port and workers."""
    settings = get_settings()
    setup_logging(settings)
    logger.info("Serving on %s:%d", settings.api.host, settings.api.port)
    uvicorn.run(
        "school_portal.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        workers=settings.api.workers,
        reload=settings.api.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
