"""Pytest configuration for shared test fixtures and environment hooks.

Updates:
  v0.2.0 - 2026-10-04 - Provide prompt store fixture and isolate settings sources.
  v0.1.0 - 2026-09-14 - Clear PromptVault environment variables between tests.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pytest import MonkeyPatch

from core.prompt_store import PromptStore

_ALIAS_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "AWS_ACCESS_KEY",
    "AWS_ACCESS_KEY_ID",
    "AWS_REGION",
    "CUSTOM_AI_API_KEY",
    "CUSTOM_AI_ENDPOINT",
    "STORAGE_MODE",
    "STORAGE_PATH",
    "WORKSPACE_PATH",
    "GLOBAL_STORAGE_DIR",
    "ENABLE_AI",
    "ENABLE_AI_SUGGESTIONS",
    "AI_PROVIDER",
    "AI_MODEL",
    "DEFAULT_TAGS",
    "AI_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Run each test from an empty directory with no PromptVault configuration."""
    for name in list(os.environ):
        if name.upper().startswith("PROMPTVAULT_"):
            monkeypatch.delenv(name, raising=False)
    for name in _ALIAS_VARS:
        monkeypatch.delenv(name, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg"))


@pytest.fixture()
def storage_dir(tmp_path: Path) -> Path:
    """Return a fresh storage directory path (not yet created)."""
    return tmp_path / "vault"


@pytest.fixture()
def store(storage_dir: Path) -> PromptStore:
    """Return an empty PromptStore rooted at *storage_dir*."""
    return PromptStore(storage_dir)
