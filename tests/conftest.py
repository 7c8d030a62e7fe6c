# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

import os
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

# Use litellm's bundled model cost map; the remote fetch it does at import
# time races its own import lock when there is no network access.
os.environ.setdefault("LITELLM_LOCAL_MODEL_COST_MAP", "True")

import pytest

from school_portal.core.config import clear_settings_cache
from school_portal.infrastructure.events import reset_event_bus
from school_portal.infrastructure.storage import reset_storage


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Global State
# =============================================================================


@pytest.fixture(autouse=True)
def reset_singletons() -> Generator[None, None, None]:
    """Reset cached settings, the event bus and the storage backend."""
    clear_settings_cache()
    reset_event_bus()
    reset_storage()
    yield
    clear_settings_cache()
    reset_event_bus()
    reset_storage()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.delete = AsyncMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.refresh = AsyncMock()
    db.execute = AsyncMock()
    db.get = AsyncMock(return_value=None)
    return db


@pytest.fixture
def mock_event_bus() -> MagicMock:
    """Create mock event bus recording published events."""
    bus = MagicMock()
    bus.publish = AsyncMock()
    return bus


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def sample_user_id() -> str:
    """Provide a sample user ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def sample_post_id() -> str:
    """Provide a sample post ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440002"
