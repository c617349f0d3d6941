"""Core service layer for PromptVault.

Updates:
  v0.3.0 - 2026-10-04 - Export suggestion service and factory helpers.
  v0.2.0 - 2026-09-24 - Export catalogue import/export helpers.
  v0.1.0 - 2026-09-14 - Surface PromptStore and the storage exception hierarchy.
"""

from .catalog_io import EXPORT_VERSION, build_export_envelope, read_import_entries
from .exceptions import (
    CatalogFormatError,
    PromptNotFoundError,
    PromptStorageError,
    PromptValidationError,
    PromptVaultError,
    ProviderCallError,
    ProviderUnsupportedError,
    SuggestionError,
)
from .factory import build_prompt_store, build_suggestion_service, resolve_settings_storage_dir
from .prompt_store import PromptStore
from .storage_paths import resolve_storage_dir
from .suggestions import AIConfig, AIProviderKind, AISuggestions, AISuggestionService

__all__ = [
    "EXPORT_VERSION",
    "AIConfig",
    "AIProviderKind",
    "AISuggestionService",
    "AISuggestions",
    "CatalogFormatError",
    "PromptNotFoundError",
    "PromptStorageError",
    "PromptStore",
    "PromptValidationError",
    "PromptVaultError",
    "ProviderCallError",
    "ProviderUnsupportedError",
    "SuggestionError",
    "build_export_envelope",
    "build_prompt_store",
    "build_suggestion_service",
    "read_import_entries",
    "resolve_settings_storage_dir",
    "resolve_storage_dir",
]
