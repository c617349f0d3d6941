"""Read and write prompt export envelopes for bulk import and export.

Updates:
  v0.2.2 - 2026-10-19 - Skip entries with malformed tags; reject non UTF-8 import files.
  v0.2.1 - 2026-10-02 - Keep imported updatedAt at or after the preserved createdAt.
  v0.2.0 - 2026-09-24 - Accept YAML envelopes alongside JSON for import and export.
  v0.1.0 - 2026-09-21 - Extract envelope helpers from the catalogue exporter.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

import yaml

from models.prompt_model import (
    Prompt,
    format_timestamp,
    new_prompt_id,
    normalize_tags,
    parse_timestamp,
)

from .exceptions import CatalogFormatError, PromptStorageError, PromptValidationError

EXPORT_VERSION = "1.0.0"
IMPORT_DEFAULT_TAGS: tuple[str, ...] = ("imported",)
_YAML_SUFFIXES = {".yaml", ".yml"}

CatalogEntry = dict[str, Any]

logger = logging.getLogger("promptvault.catalog")


def resolve_catalog_format(path: Path, explicit: str | None = None) -> str:
    """Return ``json`` or ``yaml`` from *explicit* or the file suffix of *path*."""
    if explicit:
        fmt = explicit.strip().lower()
        if fmt not in {"json", "yaml"}:
            raise ValueError("fmt must be 'json' or 'yaml'")
        return fmt
    return "yaml" if path.suffix.lower() in _YAML_SUFFIXES else "json"


def build_export_envelope(
    prompts: Iterable[Prompt],
    *,
    exported_at: datetime | None = None,
) -> dict[str, Any]:
    """Return the versioned export payload for *prompts*."""
    stamp = exported_at or datetime.now(UTC)
    return {
        "version": EXPORT_VERSION,
        "exportDate": format_timestamp(stamp),
        "prompts": [prompt.to_record() for prompt in prompts],
    }


def write_export_envelope(
    prompts: Iterable[Prompt],
    output_path: Path,
    *,
    fmt: str | None = None,
) -> Path:
    """Write an export envelope to *output_path* as pretty JSON or YAML."""
    resolved_path = output_path.expanduser()
    fmt_value = resolve_catalog_format(resolved_path, fmt)
    payload = build_export_envelope(prompts)
    try:
        resolved_path.parent.mkdir(parents=True, exist_ok=True)
        if fmt_value == "json":
            resolved_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        else:
            with resolved_path.open("w", encoding="utf-8") as handle:
                yaml.safe_dump(payload, handle, allow_unicode=True, sort_keys=False)
    except OSError as exc:
        raise PromptStorageError(f"Failed to export prompts: {exc}") from exc
    logger.info("Exported %d prompts to %s", len(payload["prompts"]), resolved_path)
    return resolved_path


def _parse_payload(contents: str, path: Path) -> object:
    if resolve_catalog_format(path) == "yaml":
        try:
            return yaml.safe_load(contents)
        except yaml.YAMLError as exc:
            raise CatalogFormatError(f"Invalid YAML in {path}") from exc
    try:
        return json.loads(contents)
    except json.JSONDecodeError as exc:
        raise CatalogFormatError(f"Invalid JSON in {path}") from exc


def read_import_entries(path: Path) -> list[CatalogEntry]:
    """Return candidate prompt entries from an envelope or a bare list.

    Entries that are not objects are dropped; validation of individual entries is
    left to :func:`entry_to_prompt`.
    """
    resolved_path = path.expanduser()
    try:
        contents = resolved_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise CatalogFormatError(f"Import file is not valid UTF-8: {resolved_path}") from exc
    except OSError as exc:
        raise PromptStorageError(f"Cannot read import file: {resolved_path}") from exc
    payload = _parse_payload(contents, resolved_path)

    raw_entries: list[object]
    if isinstance(payload, Mapping) and isinstance(payload.get("prompts"), list):
        raw_entries = cast("list[object]", payload["prompts"])
    elif isinstance(payload, list):
        raw_entries = cast("list[object]", payload)
    else:
        raise CatalogFormatError("Invalid import file format")

    entries: list[CatalogEntry] = []
    for raw_entry in raw_entries:
        if not isinstance(raw_entry, Mapping):
            logger.debug("Skipping non-object import entry: %r", raw_entry)
            continue
        entry_mapping = cast("Mapping[object, Any]", raw_entry)
        entries.append({str(key): value for key, value in entry_mapping.items()})
    return entries


def _required_text(entry: Mapping[str, Any], key: str) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise PromptValidationError(f"Import entry is missing '{key}'")
    return value


def entry_to_prompt(entry: Mapping[str, Any], *, now: datetime | None = None) -> Prompt:
    """Convert an import entry into a new Prompt with a freshly minted id."""
    title = _required_text(entry, "title")
    content = _required_text(entry, "content")
    stamp = now or datetime.now(UTC)
    created_at = parse_timestamp(entry.get("createdAt")) or stamp
    raw_tags = entry.get("tags")
    try:
        tags = normalize_tags(raw_tags) if raw_tags is not None else list(IMPORT_DEFAULT_TAGS)
    except ValueError as exc:
        raise PromptValidationError(f"Import entry has invalid tags: {exc}") from exc
    return Prompt(
        id=new_prompt_id(),
        title=title,
        content=content,
        tags=tags,
        created_at=created_at,
        updated_at=max(stamp, created_at),
        source=str(entry.get("source") or "imported"),
        language=str(entry.get("language") or "text"),
        context=str(entry.get("context") or ""),
    )


__all__ = [
    "EXPORT_VERSION",
    "IMPORT_DEFAULT_TAGS",
    "build_export_envelope",
    "entry_to_prompt",
    "read_import_entries",
    "resolve_catalog_format",
    "write_export_envelope",
]
