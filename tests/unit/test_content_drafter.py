# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the writing assistant."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from school_portal.core.config.settings import AISettings
from school_portal.domains.posts import (
    ContentDraftError,
    ContentDrafter,
    ContentDraftValidationError,
)
from school_portal.domains.posts.drafting import SYSTEM_PROMPT, build_prompt


def create_completion(text: str | None) -> MagicMock:
    """Create a mock LiteLLM completion response."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = text
    return response


@pytest.fixture
def ai_settings() -> AISettings:
    return AISettings(
        enabled=True,
        model="gemini/gemini-2.0-flash",
        api_key="test-key",  # type: ignore[arg-type]
        max_tokens=800,
    )


@pytest.fixture
def drafter(ai_settings: AISettings) -> ContentDrafter:
    return ContentDrafter(ai_settings)


class TestBuildPrompt:
    """Tests for prompt construction."""

    def test_news_prompt_contains_title(self) -> None:
        prompt = build_prompt("Hội khỏe Phù Đổng", "news")

        assert '"Hội khỏe Phù Đổng"' in prompt
        assert "bài tin tức" in prompt

    def test_announcement_prompt(self) -> None:
        assert "thông báo" in build_prompt("Lịch nghỉ Tết", "announcement")


class TestDraftContent:
    """Tests for ContentDrafter.draft_content."""

    @pytest.mark.asyncio
    async def test_successful_draft(self, drafter: ContentDrafter) -> None:
        text = "**Sáng nay** toàn trường tổ chức lễ khai giảng.\nCác em học sinh..." * 5
        mock_completion = AsyncMock(return_value=create_completion(text))

        with patch("school_portal.domains.posts.drafting.acompletion", mock_completion):
            draft = await drafter.draft_content("  Lễ khai giảng ", "news")

        assert draft.content.startswith("<b>Sáng nay</b>")
        assert "<br/>" in draft.content
        assert draft.summary == text[:150] + "..."

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["model"] == "gemini/gemini-2.0-flash"
        assert kwargs["api_key"] == "test-key"
        assert kwargs["max_tokens"] == 800
        assert "api_base" not in kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert '"Lễ khai giảng"' in kwargs["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_empty_title_is_rejected(self, drafter: ContentDrafter) -> None:
        with pytest.raises(ContentDraftValidationError, match="Title is required"):
            await drafter.draft_content("   ")

    @pytest.mark.asyncio
    async def test_disabled_assistant(self) -> None:
        drafter = ContentDrafter(AISettings(enabled=False))

        assert drafter.enabled is False
        with pytest.raises(ContentDraftError, match="not configured"):
            await drafter.draft_content("Tin mới")

    @pytest.mark.asyncio
    async def test_provider_failure_is_wrapped(self, drafter: ContentDrafter) -> None:
        failure = RuntimeError("quota exceeded")
        mock_completion = AsyncMock(side_effect=failure)

        with patch("school_portal.domains.posts.drafting.acompletion", mock_completion):
            with pytest.raises(ContentDraftError) as exc_info:
                await drafter.draft_content("Tin mới")

        assert exc_info.value.model == "gemini/gemini-2.0-flash"
        assert exc_info.value.original_error is failure
        assert "quota exceeded" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_empty_completion(self, drafter: ContentDrafter) -> None:
        mock_completion = AsyncMock(return_value=create_completion(None))

        with patch("school_portal.domains.posts.drafting.acompletion", mock_completion):
            with pytest.raises(ContentDraftError, match="empty draft"):
                await drafter.draft_content("Tin mới")

    @pytest.mark.asyncio
    async def test_api_base_is_forwarded(self) -> None:
        drafter = ContentDrafter(
            AISettings(enabled=True, model="ollama/llama3", api_base="http://localhost:11434")
        )
        mock_completion = AsyncMock(return_value=create_completion("Nội dung"))

        with patch("school_portal.domains.posts.drafting.acompletion", mock_completion):
            await drafter.draft_content("Tin mới")

        kwargs = mock_completion.call_args.kwargs
        assert kwargs["api_base"] == "http://localhost:11434"
        assert "api_key" not in kwargs
