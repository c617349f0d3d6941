"""Prompt construction and tolerant response parsing for AI suggestions.

Models frequently wrap the requested JSON object in prose or Markdown fences, so
parsing extracts the span from the first ``{`` to the last ``}`` before decoding.

Updates:
  v0.1.2 - 2026-10-19 - Reject replies whose kept tags are not all strings.
  v0.1.1 - 2026-10-01 - Drop tags that are empty after trimming.
  v0.1.0 - 2026-09-28 - Introduce suggestion prompt builder and response parser.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, cast

from prompt_templates import SUGGESTION_USER_TEMPLATE

from .models import AISuggestions

if TYPE_CHECKING:
    from collections.abc import Sequence

MAX_CONTENT_CHARS = 500
MAX_TITLE_CHARS = 100
MAX_TAGS = 5
_JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)

logger = logging.getLogger("promptvault.suggestions")


def truncate_content(content: str, limit: int = MAX_CONTENT_CHARS) -> str:
    """Return *content* cut to *limit* characters with an ellipsis when shortened."""
    if len(content) <= limit:
        return content
    return content[:limit] + "..."


def build_suggestion_prompt(content: str, language: str) -> str:
    """Render the user message asking for a title and tags."""
    return SUGGESTION_USER_TEMPLATE.format(
        language=language,
        content=truncate_content(content),
    )


def parse_suggestion_response(response_text: str | None) -> AISuggestions | None:
    """Extract and validate a ``{"title", "tags"}`` object from model output.

    Returns ``None`` when no JSON object is present, decoding fails, or the
    decoded object lacks a non-empty string title and a list of string tags.
    """
    if not response_text:
        return None
    match = _JSON_OBJECT_PATTERN.search(response_text)
    if match is None:
        logger.debug("No JSON object found in suggestion response")
        return None
    try:
        payload: object = json.loads(match.group(0))
    except json.JSONDecodeError:
        logger.debug("Suggestion response contained malformed JSON")
        return None
    if not isinstance(payload, Mapping):
        return None
    mapping_payload = cast("Mapping[str, Any]", payload)
    title = mapping_payload.get("title")
    tags = mapping_payload.get("tags")
    if not isinstance(title, str) or not title or not isinstance(tags, list):
        return None
    cleaned_tags: list[str] = []
    for tag in cast("Sequence[object]", tags)[:MAX_TAGS]:
        if not isinstance(tag, str):
            logger.debug("Suggestion response contained a non-string tag")
            return None
        text = tag.strip().lower()
        if text:
            cleaned_tags.append(text)
    return AISuggestions(title=title[:MAX_TITLE_CHARS], tags=cleaned_tags)


__all__ = [
    "MAX_CONTENT_CHARS",
    "MAX_TAGS",
    "MAX_TITLE_CHARS",
    "build_suggestion_prompt",
    "parse_suggestion_response",
    "truncate_content",
]
