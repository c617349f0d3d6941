"""Prompt data model definitions.

Updates: v0.2.1 - 2026-10-19 - Reject scalar tag values with ValueError.
Updates: v0.2.0 - 2026-09-21 - Add StorageInfo snapshot for diagnostics output.
Updates: v0.1.1 - 2026-09-16 - Accept snake_case timestamp keys when hydrating records.
Updates: v0.1.0 - 2026-09-14 - Initial Prompt schema with serialization helpers.
"""
from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


def _utc_now() -> datetime:
    """Return an aware UTC timestamp."""
    return datetime.now(UTC)


def new_prompt_id() -> str:
    """Return a fresh opaque prompt identifier."""
    return str(uuid.uuid4())


def parse_timestamp(value: Any) -> datetime | None:
    """Parse ISO-8601 strings (or datetimes) into aware UTC datetimes."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=UTC)
    text = str(value).strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def format_timestamp(value: datetime) -> str:
    """Return an ISO-8601 UTC string with a ``Z`` suffix."""
    return value.astimezone(UTC).isoformat().replace("+00:00", "Z")


def normalize_tags(items: object) -> list[str]:
    """Normalize tag inputs (list, tuple, or single string) into a list of strings."""
    if items is None:
        return []
    if isinstance(items, str):
        return [items]
    if not isinstance(items, (list, tuple)):
        raise ValueError(f"tags must be a list of strings, got {type(items).__name__}")
    return [str(item) for item in items]


@dataclass(slots=True)
class PromptInput:
    """Creation request for a new prompt; system fields are minted by the store."""
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    language: str = "text"
    source: str = "manual"
    context: str = ""


@dataclass(slots=True)
class Prompt:
    """Dataclass representation of a stored prompt."""
    id: str
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utc_now)
    updated_at: datetime = field(default_factory=_utc_now)
    source: str = "manual"
    language: str = "text"
    context: str = ""

    @classmethod
    def from_input(cls, data: PromptInput, *, now: datetime | None = None) -> Prompt:
        """Mint a new prompt with a fresh id and matching timestamps."""
        stamp = now or _utc_now()
        return cls(
            id=new_prompt_id(),
            title=data.title,
            content=data.content,
            tags=list(data.tags),
            created_at=stamp,
            updated_at=stamp,
            source=data.source,
            language=data.language,
            context=data.context,
        )

    def to_record(self) -> dict[str, Any]:
        """Return the JSON document representation used on disk and in exports."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "source": self.source,
            "language": self.language,
            "context": self.context,
        }

    @classmethod
    def from_record(cls, data: Mapping[str, Any]) -> Prompt:
        """Create a Prompt from a stored dictionary record."""
        created_at = parse_timestamp(data.get("createdAt", data.get("created_at")))
        updated_at = parse_timestamp(data.get("updatedAt", data.get("updated_at")))
        created = created_at or updated_at or _utc_now()
        return cls(
            id=str(data.get("id") or new_prompt_id()),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            tags=normalize_tags(data.get("tags")),
            created_at=created,
            updated_at=updated_at or created,
            source=str(data.get("source") or ""),
            language=str(data.get("language") or ""),
            context=str(data.get("context") or ""),
        )

    def matches(self, term: str) -> bool:
        """Return ``True`` when *term* occurs in the title, content, or any tag."""
        needle = term.lower()
        return (
            needle in self.title.lower()
            or needle in self.content.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


@dataclass(slots=True, frozen=True)
class StorageInfo:
    """Snapshot describing the storage directory and backing file."""
    path: str
    count: int
    size: int


__all__ = [
    "Prompt",
    "PromptInput",
    "StorageInfo",
    "format_timestamp",
    "new_prompt_id",
    "normalize_tags",
    "parse_timestamp",
]
