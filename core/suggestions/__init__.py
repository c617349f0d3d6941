"""AI title and tag suggestion providers and service wiring.

Updates:
  v0.1.2 - 2026-10-04 - Export keyword heuristics used for offline fallbacks.
  v0.1.1 - 2026-09-30 - Export response parsing helpers.
  v0.1.0 - 2026-09-28 - Introduce provider, model, and service exports.
"""

from .heuristics import heuristic_suggestions, suggest_tags, suggest_title
from .models import AIConfig, AIProviderKind, AISuggestions, ProviderDescriptor
from .parsing import build_suggestion_prompt, parse_suggestion_response, truncate_content
from .providers import (
    AnthropicSuggestionProvider,
    BedrockSuggestionProvider,
    CustomEndpointSuggestionProvider,
    OpenAISuggestionProvider,
    SuggestionProvider,
    default_suggestion_providers,
    resolve_suggestion_provider,
)
from .service import AISuggestionService

__all__ = [
    "AIConfig",
    "AIProviderKind",
    "AISuggestionService",
    "AISuggestions",
    "AnthropicSuggestionProvider",
    "BedrockSuggestionProvider",
    "CustomEndpointSuggestionProvider",
    "OpenAISuggestionProvider",
    "ProviderDescriptor",
    "SuggestionProvider",
    "build_suggestion_prompt",
    "default_suggestion_providers",
    "heuristic_suggestions",
    "parse_suggestion_response",
    "resolve_suggestion_provider",
    "suggest_tags",
    "suggest_title",
    "truncate_content",
]
