"""Offline keyword heuristics for prompt titles and tags.

Used when AI suggestions are disabled or a provider returns nothing.

Updates:
  v0.1.0 - 2026-09-30 - Introduce keyword based title and tag inference.
"""

from __future__ import annotations

import re

from .models import AISuggestions

DEFAULT_TITLE = "New Prompt"
DEFAULT_TAG = "general"
MAX_TITLE_WORDS = 4
MIN_WORD_LENGTH = 4

_STOP_WORDS = frozenset(
    {
        "this",
        "that",
        "with",
        "from",
        "they",
        "have",
        "will",
        "been",
        "said",
        "each",
        "which",
        "their",
        "time",
        "would",
        "there",
        "could",
        "other",
    }
)
_PUNCTUATION_PATTERN = re.compile(r"[^\w\s]")

# Ordered; tags are emitted in this order.
_TAG_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "programming",
        re.compile(
            r"\b(function|class|method|variable|code|programming|javascript|python|"
            r"typescript|java|c\+\+|html|css|sql|api|database)\b"
        ),
    ),
    (
        "ai",
        re.compile(
            r"\b(ai|artificial intelligence|machine learning|neural network|model|"
            r"training|algorithm|data science)\b"
        ),
    ),
    (
        "documentation",
        re.compile(
            r"\b(documentation|readme|guide|tutorial|instructions|how to|step by step)\b"
        ),
    ),
    (
        "web-development",
        re.compile(
            r"\b(web|website|frontend|backend|react|angular|vue|node|express|api|rest)\b"
        ),
    ),
    (
        "devops",
        re.compile(
            r"\b(docker|kubernetes|deployment|ci/cd|jenkins|github actions|aws|cloud|"
            r"infrastructure)\b"
        ),
    ),
    (
        "testing",
        re.compile(
            r"\b(test|testing|unit test|integration test|automation|jest|mocha|cypress)\b"
        ),
    ),
)


def suggest_title(content: str) -> str:
    """Return up to four capitalised keywords from *content*."""
    words = [
        word
        for word in _PUNCTUATION_PATTERN.sub(" ", content.lower()).split()
        if len(word) >= MIN_WORD_LENGTH and word not in _STOP_WORDS
    ]
    if not words:
        return DEFAULT_TITLE
    return " ".join(word[:1].upper() + word[1:] for word in words[:MAX_TITLE_WORDS])


def suggest_tags(content: str) -> list[str]:
    """Return the keyword families mentioned in *content*, or ``["general"]``."""
    lowered = content.lower()
    tags = [tag for tag, pattern in _TAG_PATTERNS if pattern.search(lowered)]
    return tags or [DEFAULT_TAG]


def heuristic_suggestions(content: str) -> AISuggestions:
    """Bundle the heuristic title and tags for *content*."""
    return AISuggestions(title=suggest_title(content), tags=suggest_tags(content))


__all__ = [
    "DEFAULT_TAG",
    "DEFAULT_TITLE",
    "heuristic_suggestions",
    "suggest_tags",
    "suggest_title",
]
