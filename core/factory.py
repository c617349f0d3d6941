"""Factories for constructing the prompt store and suggestion service from settings.

Updates:
  v0.2.0 - 2026-10-04 - Add build_suggestion_service honouring the configured timeout.
  v0.1.0 - 2026-09-14 - Add build_prompt_store resolving the storage location once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .prompt_store import PromptStore
from .storage_paths import resolve_storage_dir
from .suggestions import AISuggestionService, default_suggestion_providers

if TYPE_CHECKING:  # pragma: no cover - typing only
    from collections.abc import Callable

    import httpx

    from config import PromptVaultSettings

factory_logger = logging.getLogger("promptvault.factory")


def resolve_settings_storage_dir(settings: PromptVaultSettings) -> Path:
    """Return the storage directory selected by *settings*."""
    return resolve_storage_dir(
        settings.storage_mode,
        storage_path=settings.storage_path,
        workspace_path=settings.workspace_path,
        global_storage_dir=settings.global_storage_dir,
    )


def build_prompt_store(
    settings: PromptVaultSettings,
    *,
    storage_dir: Path | None = None,
) -> PromptStore:
    """Return a PromptStore rooted at the configured (or explicit) directory."""
    resolved_dir = storage_dir or resolve_settings_storage_dir(settings)
    factory_logger.debug("Initialising prompt store at %s", resolved_dir)
    store = PromptStore(resolved_dir)
    if store.load_warning:
        factory_logger.warning(store.load_warning)
    return store


def build_suggestion_service(
    settings: PromptVaultSettings,
    *,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
) -> AISuggestionService:
    """Return an AISuggestionService with the built-in providers registered."""
    providers = default_suggestion_providers(
        timeout=settings.ai_timeout_seconds,
        client_factory=client_factory,
    )
    return AISuggestionService(providers)


__all__ = [
    "build_prompt_store",
    "build_suggestion_service",
    "resolve_settings_storage_dir",
]
