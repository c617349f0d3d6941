"""JSON-file backed prompt store.

The store keeps an id-keyed in-memory index of prompts and mirrors the whole
collection to a single ``prompts.json`` document after every mutation. There is no
incremental persistence and no locking: the last writer wins when two processes
share the same file.

Usage:
    >>> from core.prompt_store import PromptStore
    >>> store = PromptStore(Path("~/.local/share/promptvault").expanduser())
    >>> prompt = store.quick_save("Greeting", "Say hello", ["demo"])

Updates:
  v0.4.1 - 2026-10-19 - Treat records with malformed field types as an unreadable file.
  v0.4.0 - 2026-10-02 - Add storage_info diagnostics and quick_save helper.
  v0.3.0 - 2026-09-24 - Delegate envelope handling to core.catalog_io.
  v0.2.0 - 2026-09-18 - Surface load failures through load_warning instead of raising.
  v0.1.0 - 2026-09-14 - Initial JSON snapshot store with CRUD and tag queries.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, cast

from models.prompt_model import Prompt, PromptInput, StorageInfo

from .catalog_io import entry_to_prompt, read_import_entries, write_export_envelope
from .exceptions import PromptNotFoundError, PromptStorageError, PromptValidationError
from .storage_paths import PROMPTS_FILENAME, ensure_storage_dir

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger("promptvault.storage")

__all__ = ["PromptStore"]


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PromptStore:
    """CRUD, query, and bulk import/export over a single JSON document."""

    def __init__(self, storage_dir: Path, *, filename: str = PROMPTS_FILENAME) -> None:
        """Create the storage directory if needed and load any existing prompts."""
        self._storage_dir = Path(storage_dir).expanduser()
        try:
            ensure_storage_dir(self._storage_dir)
        except OSError as exc:
            logger.error("Failed to create storage directory %s: %s", self._storage_dir, exc)
            raise PromptStorageError(
                f"Unable to create storage directory: {self._storage_dir}"
            ) from exc
        self._prompts_file = self._storage_dir / filename
        self._prompts: dict[str, Prompt] = {}
        self.load_warning: str | None = None
        self._load()
        logger.info("Prompt store ready at %s (%d prompts)", self._prompts_file, len(self))

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @property
    def storage_dir(self) -> Path:
        """Return the directory holding the backing document."""
        return self._storage_dir

    @property
    def prompts_file(self) -> Path:
        """Return the path of the backing JSON document."""
        return self._prompts_file

    def _load(self) -> None:
        if not self._prompts_file.exists():
            logger.info("Prompts file does not exist, starting with empty collection")
            return
        try:
            raw = json.loads(self._prompts_file.read_text(encoding="utf-8"))
            if not isinstance(raw, list):
                raise ValueError("prompts file must contain a JSON array")
            loaded: dict[str, Prompt] = {}
            for record in cast("list[Any]", raw):
                if not isinstance(record, dict):
                    raise ValueError("prompt records must be JSON objects")
                prompt = Prompt.from_record(cast("dict[str, Any]", record))
                loaded[prompt.id] = prompt
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Failed to load prompts from %s: %s", self._prompts_file, exc)
            self.load_warning = f"Failed to load prompts from storage: {exc}"
            self._prompts = {}
            return
        self._prompts = loaded

    def _save(self) -> None:
        records = [prompt.to_record() for prompt in self._prompts.values()]
        try:
            self._prompts_file.write_text(
                json.dumps(records, ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            logger.error("Failed to save prompts to %s: %s", self._prompts_file, exc)
            raise PromptStorageError("Failed to save prompts to storage") from exc
        logger.debug("Saved %d prompts to %s", len(records), self._prompts_file)

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create_prompt(self, data: PromptInput) -> Prompt:
        """Persist a new prompt built from *data* and return the stored record."""
        prompt = Prompt.from_input(data, now=_utc_now())
        self._prompts[prompt.id] = prompt
        self._save()
        return prompt

    def quick_save(self, title: str, content: str, tags: Sequence[str]) -> Prompt:
        """Create a manually entered prompt without provenance details."""
        return self.create_prompt(
            PromptInput(
                title=title,
                content=content,
                tags=list(tags),
                language="text",
                source="manual",
                context="",
            )
        )

    def get_prompt(self, prompt_id: str) -> Prompt | None:
        """Return the prompt stored under *prompt_id*, if any."""
        return self._prompts.get(prompt_id)

    def update_prompt(
        self,
        prompt_id: str,
        *,
        title: str | None = None,
        content: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> None:
        """Merge the supplied fields into an existing prompt and persist."""
        prompt = self._prompts.get(prompt_id)
        if prompt is None:
            raise PromptNotFoundError(prompt_id)
        if title is not None:
            prompt.title = title
        if content is not None:
            prompt.content = content
        if tags is not None:
            prompt.tags = list(tags)
        prompt.updated_at = max(_utc_now(), prompt.updated_at)
        self._save()

    def delete_prompt(self, prompt_id: str) -> None:
        """Remove a prompt and persist the remaining collection."""
        if prompt_id not in self._prompts:
            raise PromptNotFoundError(prompt_id)
        del self._prompts[prompt_id]
        self._save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_prompts(self) -> list[Prompt]:
        """Return all prompts, most recently updated first."""
        return sorted(self._prompts.values(), key=lambda prompt: prompt.updated_at, reverse=True)

    def search_prompts(self, term: str) -> list[Prompt]:
        """Return prompts whose title, content, or tags contain *term* (any case)."""
        return [prompt for prompt in self._prompts.values() if prompt.matches(term)]

    def prompts_by_tag(self, tag: str) -> list[Prompt]:
        """Return prompts carrying exactly *tag*."""
        return [prompt for prompt in self._prompts.values() if tag in prompt.tags]

    def all_tags(self) -> list[str]:
        """Return every distinct tag in lexicographic order."""
        return sorted({tag for prompt in self._prompts.values() for tag in prompt.tags})

    def __len__(self) -> int:
        return len(self._prompts)

    # ------------------------------------------------------------------
    # Bulk import/export
    # ------------------------------------------------------------------

    def export_prompts(self, output_path: Path, *, fmt: str | None = None) -> Path:
        """Write the whole collection to *output_path* as a versioned envelope."""
        return write_export_envelope(self._prompts.values(), Path(output_path), fmt=fmt)

    def import_prompts(self, input_path: Path) -> int:
        """Insert valid records from *input_path* under fresh ids; return the count."""
        entries = read_import_entries(Path(input_path))
        now = _utc_now()
        imported = 0
        for entry in entries:
            try:
                prompt = entry_to_prompt(entry, now=now)
            except PromptValidationError as exc:
                logger.debug("Skipping import entry: %s", exc)
                continue
            self._prompts[prompt.id] = prompt
            imported += 1
        if imported:
            self._save()
        logger.info("Imported %d of %d prompts from %s", imported, len(entries), input_path)
        return imported

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def storage_info(self) -> StorageInfo:
        """Return the storage directory, prompt count, and backing file size."""
        size = self._prompts_file.stat().st_size if self._prompts_file.exists() else 0
        return StorageInfo(path=str(self._storage_dir), count=len(self._prompts), size=size)
