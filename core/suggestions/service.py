"""Coordinator dispatching suggestion requests to registered providers.

Generation and validation treat unknown providers differently: generation raises
:class:`ProviderUnsupportedError` while validation reports ``False``.

Updates:
  v0.1.3 - 2026-10-19 - Remove the unused register hook; providers are fixed at construction.
  v0.1.2 - 2026-10-04 - Add suggest_or_fallback using keyword heuristics.
  v0.1.1 - 2026-09-30 - Expose list_providers for CLI listings.
  v0.1.0 - 2026-09-28 - Add provider-keyed suggestion service.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..exceptions import ProviderUnsupportedError
from .heuristics import heuristic_suggestions
from .models import AIConfig, AIProviderKind, AISuggestions, ProviderDescriptor
from .providers import default_suggestion_providers, resolve_suggestion_provider

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .providers import SuggestionProvider

logger = logging.getLogger("promptvault.suggestions")


class AISuggestionService:
    """High-level interface that delegates to the provider named by each config."""

    def __init__(
        self,
        providers: Mapping[AIProviderKind, SuggestionProvider] | None = None,
    ) -> None:
        """Initialise the service with a provider registry (built-ins by default)."""
        self._providers: dict[AIProviderKind, SuggestionProvider] = dict(
            providers if providers is not None else default_suggestion_providers()
        )

    def list_providers(self) -> list[ProviderDescriptor]:
        """Return the registered providers in registration order."""
        return [
            ProviderDescriptor(slug=provider.slug, display_name=provider.display_name)
            for provider in self._providers.values()
        ]

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """Return suggestions from the configured provider, or ``None``.

        Raises:
            ProviderUnsupportedError: ``config.provider`` is not registered.
        """
        provider = resolve_suggestion_provider(self._providers, config.provider)
        if provider is None:
            raise ProviderUnsupportedError(str(config.provider))
        if not config.api_key or not config.api_key.strip():
            logger.debug("Skipping AI suggestions: no API key configured")
            return None
        if not content or not content.strip():
            logger.debug("Skipping AI suggestions: empty content")
            return None
        return await provider.generate_suggestions(content, language, config)

    async def validate_config(self, config: AIConfig) -> bool:
        """Return ``True`` when the configured provider accepts the credentials."""
        provider = resolve_suggestion_provider(self._providers, config.provider)
        if provider is None:
            logger.warning("Cannot validate unsupported AI provider %s", config.provider)
            return False
        if not config.api_key or not config.api_key.strip():
            return False
        try:
            return await provider.validate_config(config)
        except Exception as exc:  # noqa: BLE001
            logger.warning("AI configuration check failed: %s", exc)
            return False

    async def suggest_or_fallback(
        self,
        content: str,
        language: str,
        config: AIConfig | None,
    ) -> AISuggestions:
        """Return AI suggestions when available, otherwise keyword heuristics."""
        if config is not None:
            suggestions = await self.generate_suggestions(content, language, config)
            if suggestions is not None:
                return suggestions
        return heuristic_suggestions(content)


__all__ = ["AISuggestionService"]
