"""Tests for the JSON-file backed prompt store.

Updates:
  v0.2.1 - 2026-10-19 - Cover records with scalar tags values.
  v0.2.0 - 2026-10-02 - Cover storage_info, quick_save, and write failure semantics.
  v0.1.0 - 2026-09-14 - Cover CRUD, ordering, queries, and persistence round trips.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from pytest import MonkeyPatch

import core.prompt_store as prompt_store_module
from core.exceptions import PromptNotFoundError, PromptStorageError
from core.prompt_store import PromptStore
from models.prompt_model import PromptInput


def _input(title: str, content: str = "body", tags: list[str] | None = None) -> PromptInput:
    return PromptInput(
        title=title,
        content=content,
        tags=list(tags or []),
        language="text",
        source="test",
        context="",
    )


def _freeze_clock(monkeypatch: MonkeyPatch, start: datetime) -> Iterator[datetime]:
    """Make the store clock advance one second per call starting at *start*."""

    def _ticks() -> Iterator[datetime]:
        current = start
        while True:
            yield current
            current += timedelta(seconds=1)

    ticks = _ticks()
    monkeypatch.setattr(prompt_store_module, "_utc_now", lambda: next(ticks))
    return ticks


def test_create_and_get_prompt(store: PromptStore) -> None:
    """Created prompts are retrievable with matching fields and timestamps."""
    created = store.create_prompt(_input("Foo", "bar"))

    fetched = store.get_prompt(created.id)
    assert fetched is not None
    assert fetched.title == "Foo"
    assert fetched.content == "bar"
    assert fetched.created_at == fetched.updated_at
    assert store.get_prompt("missing") is None


def test_create_allows_duplicates_with_distinct_ids(store: PromptStore) -> None:
    """Identical inputs produce separate records."""
    first = store.create_prompt(_input("Same", "text"))
    second = store.create_prompt(_input("Same", "text"))

    assert first.id != second.id
    assert len(store) == 2


def test_create_persists_collection_to_disk(store: PromptStore, storage_dir: Path) -> None:
    """Every mutation rewrites prompts.json as a pretty-printed JSON array."""
    prompt = store.create_prompt(_input("Persisted", tags=["a"]))

    raw = (storage_dir / "prompts.json").read_text(encoding="utf-8")
    payload = json.loads(raw)
    assert isinstance(payload, list)
    assert payload[0]["id"] == prompt.id
    assert payload[0]["tags"] == ["a"]
    assert set(payload[0]) == {
        "id",
        "title",
        "content",
        "tags",
        "createdAt",
        "updatedAt",
        "source",
        "language",
        "context",
    }
    assert '\n  {\n    "id"' in raw


def test_reload_restores_prompts(store: PromptStore, storage_dir: Path) -> None:
    """A new store over the same directory sees previously saved prompts."""
    prompt = store.create_prompt(_input("Reloaded", "content", ["x", "y"]))

    reloaded = PromptStore(storage_dir)

    restored = reloaded.get_prompt(prompt.id)
    assert restored is not None
    assert restored.title == "Reloaded"
    assert restored.tags == ["x", "y"]
    assert restored.created_at == prompt.created_at
    assert reloaded.load_warning is None


def test_update_merges_supplied_fields(store: PromptStore) -> None:
    """Only supplied fields change; others keep their values."""
    prompt = store.create_prompt(_input("Original", "content", ["keep"]))

    store.update_prompt(prompt.id, title="Renamed")

    updated = store.get_prompt(prompt.id)
    assert updated is not None
    assert updated.title == "Renamed"
    assert updated.content == "content"
    assert updated.tags == ["keep"]


def test_update_can_clear_tags(store: PromptStore) -> None:
    """An explicit empty tag list replaces existing tags."""
    prompt = store.create_prompt(_input("Tagged", tags=["one"]))

    store.update_prompt(prompt.id, tags=[])

    updated = store.get_prompt(prompt.id)
    assert updated is not None
    assert updated.tags == []


def test_update_advances_updated_at(store: PromptStore, monkeypatch: MonkeyPatch) -> None:
    """updated_at moves forward while created_at stays fixed."""
    _freeze_clock(monkeypatch, datetime(2026, 1, 1, tzinfo=UTC))
    prompt = store.create_prompt(_input("Clock"))
    created_at = prompt.created_at

    store.update_prompt(prompt.id, content="changed")

    updated = store.get_prompt(prompt.id)
    assert updated is not None
    assert updated.created_at == created_at
    assert updated.updated_at > created_at


def test_update_never_moves_updated_at_backwards(
    store: PromptStore,
    monkeypatch: MonkeyPatch,
) -> None:
    """A clock that jumps backwards does not produce an earlier updated_at."""
    later = datetime(2026, 6, 1, tzinfo=UTC)
    monkeypatch.setattr(prompt_store_module, "_utc_now", lambda: later)
    prompt = store.create_prompt(_input("Skew"))
    monkeypatch.setattr(prompt_store_module, "_utc_now", lambda: later - timedelta(days=1))

    store.update_prompt(prompt.id, title="Skewed")

    updated = store.get_prompt(prompt.id)
    assert updated is not None
    assert updated.updated_at == later


def test_update_missing_prompt_raises(store: PromptStore) -> None:
    """Updating an unknown id raises PromptNotFoundError."""
    with pytest.raises(PromptNotFoundError):
        store.update_prompt("does-not-exist", title="x")


def test_delete_removes_prompt(store: PromptStore, storage_dir: Path) -> None:
    """Deleted prompts disappear from memory and disk."""
    prompt = store.create_prompt(_input("Doomed"))

    store.delete_prompt(prompt.id)

    assert store.get_prompt(prompt.id) is None
    assert PromptStore(storage_dir).get_prompt(prompt.id) is None


def test_delete_missing_prompt_raises(store: PromptStore) -> None:
    """Deleting an unknown id raises PromptNotFoundError."""
    with pytest.raises(PromptNotFoundError):
        store.delete_prompt("does-not-exist")


def test_list_prompts_orders_by_updated_at_desc(
    store: PromptStore,
    monkeypatch: MonkeyPatch,
) -> None:
    """The most recently updated prompt is listed first."""
    _freeze_clock(monkeypatch, datetime(2026, 1, 1, tzinfo=UTC))
    first = store.create_prompt(_input("First"))
    second = store.create_prompt(_input("Second"))

    assert [prompt.id for prompt in store.list_prompts()] == [second.id, first.id]

    store.update_prompt(first.id, content="touched")

    assert [prompt.id for prompt in store.list_prompts()] == [first.id, second.id]


def test_search_is_case_insensitive_across_fields(store: PromptStore) -> None:
    """Search matches title, content, or any tag regardless of case."""
    by_title = store.create_prompt(_input("Refactor Helper", "body"))
    by_content = store.create_prompt(_input("Other", "please REFACTOR this"))
    by_tag = store.create_prompt(_input("Tagged", "body", ["refactoring"]))
    store.create_prompt(_input("Unrelated", "nothing here", ["misc"]))

    results = store.search_prompts("refactor")

    assert [prompt.id for prompt in results] == [by_title.id, by_content.id, by_tag.id]


def test_search_empty_term_matches_everything(store: PromptStore) -> None:
    """An empty term is a substring of every field."""
    store.create_prompt(_input("A"))
    store.create_prompt(_input("B"))

    assert len(store.search_prompts("")) == 2


def test_prompts_by_tag_and_all_tags(store: PromptStore) -> None:
    """Tag filtering is exact and all_tags is a sorted distinct union."""
    store.create_prompt(_input("One", tags=["python"]))
    store.create_prompt(_input("Two", tags=["python", "java"]))
    store.create_prompt(_input("Three", tags=["java"]))

    assert len(store.prompts_by_tag("python")) == 2
    assert store.prompts_by_tag("Python") == []
    assert store.all_tags() == ["java", "python"]


def test_empty_store_queries(store: PromptStore) -> None:
    """Queries over an empty collection return empty results."""
    assert store.list_prompts() == []
    assert store.search_prompts("x") == []
    assert store.all_tags() == []


def test_quick_save_uses_manual_defaults(store: PromptStore) -> None:
    """quick_save records manual provenance with text language."""
    prompt = store.quick_save("Quick", "content", ["fast"])

    assert prompt.source == "manual"
    assert prompt.language == "text"
    assert prompt.context == ""
    assert prompt.tags == ["fast"]


def test_missing_file_starts_empty(storage_dir: Path) -> None:
    """An absent prompts.json yields an empty store and creates the directory."""
    store = PromptStore(storage_dir)

    assert len(store) == 0
    assert store.load_warning is None
    assert storage_dir.is_dir()


def test_corrupt_file_sets_load_warning(storage_dir: Path) -> None:
    """Unparsable storage is absorbed with a warning instead of raising."""
    storage_dir.mkdir(parents=True)
    (storage_dir / "prompts.json").write_text("{not json", encoding="utf-8")

    store = PromptStore(storage_dir)

    assert len(store) == 0
    assert store.load_warning is not None
    assert "Failed to load prompts" in store.load_warning


def test_non_array_file_sets_load_warning(storage_dir: Path) -> None:
    """A JSON document that is not an array is treated as unreadable."""
    storage_dir.mkdir(parents=True)
    (storage_dir / "prompts.json").write_text('{"prompts": []}', encoding="utf-8")

    store = PromptStore(storage_dir)

    assert len(store) == 0
    assert store.load_warning is not None


def test_malformed_tags_field_sets_load_warning(storage_dir: Path) -> None:
    """A record whose tags value is a scalar makes the file unreadable, not fatal."""
    storage_dir.mkdir(parents=True)
    (storage_dir / "prompts.json").write_text(
        json.dumps([{"id": "x", "title": "a", "content": "b", "tags": 5}]),
        encoding="utf-8",
    )

    store = PromptStore(storage_dir)

    assert len(store) == 0
    assert store.load_warning is not None
    assert "tags" in store.load_warning


def test_write_failure_raises_without_rollback(store: PromptStore) -> None:
    """A failed save surfaces PromptStorageError but keeps the in-memory change."""
    store.prompts_file.mkdir()

    with pytest.raises(PromptStorageError):
        store.create_prompt(_input("Unsaved"))

    assert len(store) == 1


def test_storage_info_reports_count_and_size(store: PromptStore, storage_dir: Path) -> None:
    """storage_info reflects the directory, record count, and file size."""
    empty_info = store.storage_info()
    assert empty_info.path == str(storage_dir)
    assert empty_info.count == 0
    assert empty_info.size == 0

    store.create_prompt(_input("Sized"))

    info = store.storage_info()
    assert info.count == 1
    assert info.size == (storage_dir / "prompts.json").stat().st_size
    assert info.size > 0
