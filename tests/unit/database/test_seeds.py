# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the portal seed data."""

from unittest.mock import MagicMock

import pytest

from school_portal.domains.menu.service import SYSTEM_PATHS
from school_portal.infrastructure.database.seeds import seed_portal_database
from school_portal.infrastructure.database.seeds.portal import seed_categories, seed_menu


def count_result(count: int) -> MagicMock:
    result = MagicMock()
    result.scalar.return_value = count
    return result


@pytest.fixture
def session(mock_db):
    mock_db.add_all = MagicMock()
    return mock_db


class TestSeeds:
    """Tests for the idempotent seeders."""

    @pytest.mark.asyncio
    async def test_seed_categories_on_empty_table(self, session) -> None:
        session.execute.return_value = count_result(0)

        categories = await seed_categories(session)

        slugs = {(c.module_type, c.slug) for c in categories}
        assert ("documents", "official") in slugs
        assert ("documents", "resource") in slugs
        assert ("news", "tin-tuc") in slugs
        session.add_all.assert_called_once()

    @pytest.mark.asyncio
    async def test_seed_categories_skips_existing(self, session) -> None:
        session.execute.return_value = count_result(3)

        categories = await seed_categories(session)

        assert categories == []
        session.add_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_seed_menu_uses_system_paths(self, session) -> None:
        session.execute.return_value = count_result(0)

        items = await seed_menu(session)

        assert [item.path for item in items] == list(SYSTEM_PATHS)
        assert [item.order_index for item in items] == list(range(1, len(SYSTEM_PATHS) + 1))

    @pytest.mark.asyncio
    async def test_seed_portal_database_commits_once(self, session) -> None:
        session.execute.return_value = count_result(1)

        seeded = await seed_portal_database(session)

        assert seeded == {"categories": [], "menu_items": [], "display_blocks": []}
        session.commit.assert_awaited_once()
