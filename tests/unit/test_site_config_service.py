# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the school configuration service."""

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from school_portal.domains.site_config import FALLBACK_CONFIG, SiteConfigService
from school_portal.infrastructure.database.models import SchoolConfig
from school_portal.infrastructure.events import EventTypes
from school_portal.models.site import FooterLink, SchoolConfigSchema


def create_mock_result(value):
    """Create a mock result with scalar_one_or_none."""
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def config_service(mock_db, mock_event_bus):
    return SiteConfigService(db=mock_db, event_bus=mock_event_bus)


@pytest.fixture
def stored_config() -> SchoolConfig:
    """Create a stored configuration row."""
    return SchoolConfig(
        id=str(uuid4()),
        name="Trường THCS Hoa Sen",
        slogan="Học để làm người",
        banner_height=None,
        home_news_count=8,
        show_welcome_banner=False,
        home_show_program=True,
        footer_links=[{"id": "f1", "label": "Bộ GD&ĐT", "url": "https://moet.gov.vn"}],
    )


class TestGetConfig:
    """Tests for SiteConfigService.get_config."""

    @pytest.mark.asyncio
    async def test_returns_fallback_when_not_saved(self, config_service, mock_db) -> None:
        mock_db.execute.return_value = create_mock_result(None)

        config = await config_service.get_config()

        assert config == FALLBACK_CONFIG
        assert config is not FALLBACK_CONFIG

    @pytest.mark.asyncio
    async def test_returns_stored_row(self, config_service, mock_db, stored_config) -> None:
        mock_db.execute.return_value = create_mock_result(stored_config)

        config = await config_service.get_config()

        assert config.id == stored_config.id
        assert config.name == "Trường THCS Hoa Sen"
        assert config.show_welcome_banner is False
        assert config.home_news_count == 8
        assert config.banner_height == FALLBACK_CONFIG.banner_height
        assert config.footer_links == [
            FooterLink(id="f1", label="Bộ GD&ĐT", url="https://moet.gov.vn")
        ]


class TestSaveConfig:
    """Tests for SiteConfigService.save_config."""

    @pytest.mark.asyncio
    async def test_first_save_inserts_row(self, config_service, mock_db, mock_event_bus) -> None:
        mock_db.execute.return_value = create_mock_result(None)
        request = SchoolConfigSchema(name="Trường Mới", home_news_count=4)

        config = await config_service.save_config(request)

        mock_db.add.assert_called_once()
        added = mock_db.add.call_args[0][0]
        assert isinstance(added, SchoolConfig)
        assert added.name == "Trường Mới"
        assert config.home_news_count == 4
        mock_db.commit.assert_awaited_once()
        mock_event_bus.publish.assert_awaited_once()
        assert mock_event_bus.publish.call_args[0][0] == EventTypes.Config.UPDATED

    @pytest.mark.asyncio
    async def test_save_updates_existing_row(
        self,
        config_service,
        mock_db,
        stored_config,
    ) -> None:
        mock_db.execute.return_value = create_mock_result(stored_config)
        request = SchoolConfigSchema(
            name="Tên mới",
            banner_height=500,
            footer_links=[FooterLink(id="x", label="Sở GD", url="https://so.edu.vn")],
        )

        config = await config_service.save_config(request)

        mock_db.add.assert_not_called()
        assert stored_config.name == "Tên mới"
        assert stored_config.footer_links == [
            {"id": "x", "label": "Sở GD", "url": "https://so.edu.vn"}
        ]
        assert config.banner_height == 500
