# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Writing assistant producing first drafts of posts via LiteLLM.

The provider is configured by ``AISettings``. API keys and base URLs are
passed straight to ``acompletion()`` instead of environment variables.
"""

import logging
from typing import Any

import litellm
from litellm import acompletion

from school_portal.core.config.settings import AISettings
from school_portal.models.content import ContentDraftResponse, DraftKind
from school_portal.utils.text import draft_to_html, make_summary

logger = logging.getLogger(__name__)

SUMMARY_LENGTH = 150

_KIND_LABELS: dict[str, str] = {
    "news": "bài tin tức",
    "announcement": "thông báo",
}

SYSTEM_PROMPT = (
    "Bạn là biên tập viên cổng thông tin điện tử của một trường phổ thông tại Việt Nam. "
    "Viết bằng tiếng Việt, giọng văn trang trọng, rõ ràng, phù hợp với phụ huynh và học sinh."
)


class ContentDraftError(Exception):
    """Raised when the assistant is disabled or the provider fails.

    Attributes:
        message: Error description.
        model: Model that was called, if any.
        original_error: Underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        model: str | None = None,
        original_error: Exception | None = None,
    ) -> None:
        self.message = message
        self.model = model
        self.original_error = original_error
        super().__init__(self.message)


class ContentDraftValidationError(ContentDraftError):
    """Raised when the draft request itself is invalid."""

    pass


def build_prompt(title: str, kind: DraftKind) -> str:
    """Build the user prompt for a draft."""
    label = _KIND_LABELS.get(kind, _KIND_LABELS["news"])
    return (
        f"Hãy viết một {label} cho website nhà trường với tiêu đề: \"{title}\".\n"
        "Yêu cầu: khoảng 300-400 từ, chia đoạn rõ ràng, có thể dùng **in đậm** "
        "cho các ý chính, không dùng tiêu đề markdown."
    )


class ContentDrafter:
    """Generate post drafts with the configured LLM.

    Example:
        >>> drafter = ContentDrafter(settings.ai)
        >>> draft = await drafter.draft_content("Lễ khai giảng năm học mới", "news")
        >>> draft.summary
        'Sáng ngày 5/9, ...'
    """

    def __init__(self, settings: AISettings | None = None) -> None:
        self._settings = settings or AISettings()
        litellm.set_verbose = False
        litellm.drop_params = True

    @property
    def enabled(self) -> bool:
        return self._settings.enabled

    def _provider_params(self) -> dict[str, Any]:
        params: dict[str, Any] = {}
        if self._settings.api_key is not None:
            params["api_key"] = self._settings.api_key.get_secret_value()
        if self._settings.api_base:
            params["api_base"] = self._settings.api_base
        return params

    async def draft_content(self, title: str, kind: DraftKind = "news") -> ContentDraftResponse:
        """Ask the model for an article and convert it for the editor.

        Args:
            title: Title of the article to write.
            kind: "news" or "announcement".

        Returns:
            HTML body and a plain-text summary.

        Raises:
            ContentDraftValidationError: If the title is empty.
            ContentDraftError: If the assistant is disabled or the call fails.
        """
        if not title or not title.strip():
            raise ContentDraftValidationError("Title is required")
        if not self._settings.enabled:
            raise ContentDraftError("Writing assistant is not configured")

        model = self._settings.model
        try:
            response = await acompletion(
                model=model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(title.strip(), kind)},
                ],
                temperature=0.7,
                max_tokens=self._settings.max_tokens,
                timeout=self._settings.request_timeout,
                **self._provider_params(),
            )
            text = response.choices[0].message.content or ""
        except Exception as e:
            logger.error("Draft generation failed: model=%s, error=%s", model, str(e))
            raise ContentDraftError(
                f"Draft generation failed: {str(e)}",
                model=model,
                original_error=e,
            ) from e

        if not text.strip():
            raise ContentDraftError("Model returned an empty draft", model=model)

        logger.info("Draft generated: model=%s, length=%d", model, len(text))
        return ContentDraftResponse(
            content=draft_to_html(text),
            summary=make_summary(text, SUMMARY_LENGTH),
        )
