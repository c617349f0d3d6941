"""Common exception classes for the core package.

All exceptions ultimately inherit from :class:`PromptVaultError`, allowing
callers to catch a single base class for any storage or suggestion failure while
still distinguishing individual error categories when needed.

Updates:
  v0.3.0 - 2026-09-28 - Add provider exception hierarchy for AI suggestions.
  v0.2.0 - 2026-09-21 - Add catalogue format error for import envelopes.
  v0.1.0 - 2026-09-14 - Created module with storage exceptions.
"""

from __future__ import annotations


class PromptVaultError(Exception):
    """Base exception for PromptVault failures."""


# ---------------------------------------------------------------------------
# Storage errors
# ---------------------------------------------------------------------------


class PromptNotFoundError(PromptVaultError):
    """Raised when a prompt cannot be located in the backing store."""

    def __init__(self, prompt_id: str) -> None:
        self.prompt_id = prompt_id
        super().__init__(f"Prompt not found: {prompt_id}")


class PromptValidationError(PromptVaultError):
    """Raised when a prompt record is missing required fields."""


class PromptStorageError(PromptVaultError):
    """Raised when reading or writing the backing JSON document fails."""


class CatalogFormatError(PromptStorageError):
    """Raised when an import file is neither an export envelope nor a list."""


# ---------------------------------------------------------------------------
# AI suggestion errors
# ---------------------------------------------------------------------------


class SuggestionError(PromptVaultError):
    """Base class for AI suggestion failures."""


class ProviderUnsupportedError(SuggestionError):
    """Raised when suggestions are requested from an unregistered provider."""

    def __init__(self, provider: str) -> None:
        self.provider = provider
        super().__init__(f"Unsupported AI provider: {provider}")


class ProviderCallError(SuggestionError):
    """Raised when a provider request fails or returns an unusable payload."""


__all__ = [
    "CatalogFormatError",
    "PromptNotFoundError",
    "PromptStorageError",
    "PromptValidationError",
    "PromptVaultError",
    "ProviderCallError",
    "ProviderUnsupportedError",
    "SuggestionError",
]
