# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Text helpers shared by the content services.

Covers URL slugs for Vietnamese titles, tag parsing, YouTube link handling
and the light markdown-to-HTML conversion applied to generated drafts.
"""

import re
import unicodedata
import uuid
from typing import Iterable

NO_SLUG = "no-slug"

_NON_WORD = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-{2,}")
_YOUTUBE = re.compile(
    r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=|shorts/)([^#&?]*).*"
)
_BOLD = re.compile(r"\*\*(.*?)\*\*")

YOUTUBE_ID_LENGTH = 11


def slugify(value: str | None) -> str:
    """Build a URL slug from a (Vietnamese) title.

    Lowercases, decomposes to NFD and strips combining marks, maps "đ" to
    "d", drops remaining non-word characters and joins words with dashes.

    Args:
        value: Title to convert.

    Returns:
        The slug, or "no-slug" when nothing usable remains.

    Example:
        >>> slugify("Lễ khai giảng năm học mới")
        'le-khai-giang-nam-hoc-moi'
    """
    if not value:
        return NO_SLUG
    text = unicodedata.normalize("NFD", value.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = text.replace("đ", "d")
    text = _NON_WORD.sub("", text)
    text = _WHITESPACE.sub("-", text.strip())
    text = _DASHES.sub("-", text).strip("-")
    return text or NO_SLUG


def parse_tags(value: str | Iterable[str] | None) -> list[str]:
    """Normalize tags given as a list or a comma-separated string.

    Example:
        >>> parse_tags("tuyển sinh, , lớp 6 ")
        ['tuyển sinh', 'lớp 6']
    """
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else value
    return [tag.strip() for tag in items if tag and tag.strip()]


def is_persisted_id(value: str | None) -> bool:
    """Tell whether an id refers to a stored row.

    Rows are keyed by UUID strings. Anything else (empty, or a temporary
    id minted by a client form) marks a row that has not been inserted yet.
    """
    if not value:
        return False
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def extract_youtube_id(url: str | None) -> str | None:
    """Extract the 11-character video id from a YouTube URL.

    Handles watch, short-link, embed, v/, u/ and shorts/ formats.

    Example:
        >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
        'dQw4w9WgXcQ'
    """
    if not url:
        return None
    match = _YOUTUBE.match(url.strip())
    if match and len(match.group(2)) == YOUTUBE_ID_LENGTH:
        return match.group(2)
    return None


def youtube_embed_html(video_id: str) -> str:
    """Build a responsive iframe snippet for a YouTube video id."""
    return (
        '<div class="video-container" style="position:relative;padding-bottom:56.25%;'
        'height:0;overflow:hidden;margin:20px 0;">'
        f'<iframe src="https://www.youtube.com/embed/{video_id}" '
        'style="position:absolute;top:0;left:0;width:100%;height:100%;" '
        'frameborder="0" allowfullscreen></iframe></div>'
    )


def draft_to_html(text: str) -> str:
    """Convert **bold** markers and newlines of a plain draft to HTML."""
    return _BOLD.sub(r"<b>\1</b>", text).replace("\n", "<br/>")


def make_summary(text: str, length: int = 150) -> str:
    """Cut the first characters of a text and append an ellipsis."""
    return text[:length] + "..."

