"""Data models shared by AI suggestion providers.

Updates:
  v0.1.1 - 2026-09-30 - Add ProviderDescriptor for provider listings.
  v0.1.0 - 2026-09-28 - Introduce provider kinds, request config, and suggestion result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class AIProviderKind(StrEnum):
    """Closed set of suggestion backends."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    BEDROCK = "bedrock"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: AIProviderKind | str) -> AIProviderKind | None:
        """Return the matching kind for *value*, or ``None`` when it is unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


@dataclass(slots=True)
class AIConfig:
    """Per-call provider configuration supplied by the caller."""

    provider: AIProviderKind | str
    api_key: str
    model: str | None = None
    endpoint: str | None = None
    region: str | None = None

    def __repr__(self) -> str:
        return (
            f"AIConfig(provider={self.provider!r}, api_key='***', model={self.model!r}, "
            f"endpoint={self.endpoint!r}, region={self.region!r})"
        )


@dataclass(slots=True)
class AISuggestions:
    """Validated title and tag suggestions returned by a provider."""

    title: str
    tags: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ProviderDescriptor:
    """Slug and human readable name of a registered provider."""

    slug: str
    display_name: str


__all__ = ["AIConfig", "AIProviderKind", "AISuggestions", "ProviderDescriptor"]
