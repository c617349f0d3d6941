"""Prompt templates used when asking language models for title and tag suggestions.

Updates: v0.1.2 - 2026-10-19 - Drop unused template registry helpers.
Updates: v0.1.1 - 2026-09-30 - Add connection test message for provider validation.
Updates: v0.1.0 - 2026-09-28 - Centralise suggestion prompt text for all providers.
"""

from __future__ import annotations

SUGGESTION_SYSTEM_PROMPT = (
    "You are a helpful assistant that analyzes prompts and suggests appropriate "
    "titles and tags. Always respond with valid JSON."
)

SUGGESTION_USER_TEMPLATE = (
    "Analyze the following {language} prompt and suggest:\n"
    "1. A concise, descriptive title (max 50 characters)\n"
    "2. 2-4 relevant tags\n"
    "\n"
    "Content:\n"
    '"{content}"\n'
    "\n"
    "Please respond with JSON in this exact format:\n"
    "{{\n"
    '  "title": "suggested title",\n'
    '  "tags": ["tag1", "tag2", "tag3"]\n'
    "}}"
)

CONNECTION_TEST_MESSAGE = "test"


__all__ = [
    "CONNECTION_TEST_MESSAGE",
    "SUGGESTION_SYSTEM_PROMPT",
    "SUGGESTION_USER_TEMPLATE",
]
