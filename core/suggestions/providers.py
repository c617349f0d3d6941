"""Provider protocol definitions and concrete AI suggestion providers.

Every provider performs exactly one HTTP attempt per call. Transport, HTTP, and
payload failures surface internally as :class:`ProviderCallError` and are turned
into ``None`` (generation) or ``False`` (validation) at the provider boundary.

Updates:
  v0.2.1 - 2026-10-19 - Treat request construction errors (bad headers or URLs) as call failures.
  v0.2.0 - 2026-10-03 - Add resolve_suggestion_provider and default provider registry.
  v0.1.2 - 2026-09-30 - Add custom endpoint provider sharing the OpenAI wire format.
  v0.1.1 - 2026-09-29 - Add Anthropic messages provider and Bedrock stub.
  v0.1.0 - 2026-09-28 - Introduce provider abstraction and OpenAI chat completions client.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, cast, runtime_checkable

import httpx

from prompt_templates import CONNECTION_TEST_MESSAGE, SUGGESTION_SYSTEM_PROMPT

from ..exceptions import ProviderCallError
from .models import AIConfig, AIProviderKind, AISuggestions
from .parsing import build_suggestion_prompt, parse_suggestion_response

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

DEFAULT_TIMEOUT_SECONDS = 30.0
SUGGESTION_MAX_TOKENS = 150
SUGGESTION_TEMPERATURE = 0.3
ANTHROPIC_API_VERSION = "2023-06-01"
OPENAI_DEFAULT_MODEL = "gpt-3.5-turbo"
ANTHROPIC_DEFAULT_MODEL = "claude-3-haiku-20240307"

logger = logging.getLogger("promptvault.suggestions")


@runtime_checkable
class SuggestionProvider(Protocol):
    """Protocol implemented by every AI suggestion backend."""

    slug: str
    display_name: str

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """Return validated suggestions, or ``None`` when none could be produced."""
        ...

    async def validate_config(self, config: AIConfig) -> bool:
        """Return ``True`` when *config* can authenticate against the backend."""
        ...


async def _post_json(
    url: str,
    payload: Mapping[str, Any],
    *,
    headers: Mapping[str, str],
    timeout: float,
    client_factory: Callable[[], httpx.AsyncClient] | None,
    provider_name: str,
) -> dict[str, Any]:
    """POST *payload* to *url* once and return the decoded JSON object."""
    manage_client = client_factory is None
    if client_factory is None:
        client = httpx.AsyncClient(timeout=timeout)
    else:
        client = client_factory()
    try:
        response = await client.post(url, json=dict(payload), headers=dict(headers))
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as exc:
        raise ProviderCallError(f"{provider_name} request failed: {exc}") from exc
    finally:
        if manage_client:
            await client.aclose()
    try:
        data: object = response.json()
    except ValueError as exc:
        raise ProviderCallError(f"{provider_name} returned invalid JSON") from exc
    if not isinstance(data, dict):
        raise ProviderCallError(f"{provider_name} returned an unexpected payload")
    return cast("dict[str, Any]", data)


def _extract_chat_text(data: Mapping[str, Any]) -> str | None:
    """Return ``choices[0].message.content`` from an OpenAI-style response."""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = cast("Sequence[object]", choices)[0]
    if not isinstance(first, Mapping):
        return None
    message = cast("Mapping[str, Any]", first).get("message")
    if not isinstance(message, Mapping):
        return None
    content = cast("Mapping[str, Any]", message).get("content")
    return content if isinstance(content, str) else None


def _extract_anthropic_text(data: Mapping[str, Any]) -> str | None:
    """Return ``content[0].text`` from an Anthropic messages response."""
    blocks = data.get("content")
    if not isinstance(blocks, list) or not blocks:
        return None
    first = cast("Sequence[object]", blocks)[0]
    if not isinstance(first, Mapping):
        return None
    text = cast("Mapping[str, Any]", first).get("text")
    return text if isinstance(text, str) else None


def _bearer_headers(api_key: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Content-Type": "application/json",
    }


def _chat_completion_payload(
    model: str,
    content: str,
    language: str,
) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SUGGESTION_SYSTEM_PROMPT},
            {"role": "user", "content": build_suggestion_prompt(content, language)},
        ],
        "max_tokens": SUGGESTION_MAX_TOKENS,
        "temperature": SUGGESTION_TEMPERATURE,
    }


def _chat_probe_payload(model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": CONNECTION_TEST_MESSAGE}],
        "max_tokens": 1,
    }


@dataclass(slots=True)
class OpenAISuggestionProvider:
    """HTTPX-backed OpenAI chat completions provider."""

    base_url: str = "https://api.openai.com/v1"
    default_model: str = OPENAI_DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    slug: str = AIProviderKind.OPENAI.value
    display_name: str = "OpenAI"
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    def _url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """Request a title and tags from the chat completions endpoint."""
        payload = _chat_completion_payload(config.model or self.default_model, content, language)
        try:
            data = await _post_json(
                self._url(),
                payload,
                headers=_bearer_headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI suggestion error: %s", exc)
            return None
        return parse_suggestion_response(_extract_chat_text(data))

    async def validate_config(self, config: AIConfig) -> bool:
        """Send a one-token probe request and report whether it succeeded."""
        try:
            await _post_json(
                self._url(),
                _chat_probe_payload(config.model or self.default_model),
                headers=_bearer_headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI configuration check failed: %s", exc)
            return False
        return True


@dataclass(slots=True)
class AnthropicSuggestionProvider:
    """HTTPX-backed Anthropic messages API provider."""

    base_url: str = "https://api.anthropic.com/v1"
    default_model: str = ANTHROPIC_DEFAULT_MODEL
    api_version: str = ANTHROPIC_API_VERSION
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    slug: str = AIProviderKind.ANTHROPIC.value
    display_name: str = "Anthropic Claude"
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    def _url(self) -> str:
        return f"{self.base_url.rstrip('/')}/messages"

    def _headers(self, api_key: str) -> dict[str, str]:
        return {
            "x-api-key": api_key,
            "anthropic-version": self.api_version,
            "Content-Type": "application/json",
        }

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """Request a title and tags from the messages endpoint."""
        payload: dict[str, Any] = {
            "model": config.model or self.default_model,
            "max_tokens": SUGGESTION_MAX_TOKENS,
            "messages": [
                {"role": "user", "content": build_suggestion_prompt(content, language)},
            ],
        }
        try:
            data = await _post_json(
                self._url(),
                payload,
                headers=self._headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI suggestion error: %s", exc)
            return None
        return parse_suggestion_response(_extract_anthropic_text(data))

    async def validate_config(self, config: AIConfig) -> bool:
        """Send a one-token probe message and report whether it succeeded."""
        try:
            await _post_json(
                self._url(),
                _chat_probe_payload(config.model or self.default_model),
                headers=self._headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI configuration check failed: %s", exc)
            return False
        return True


@dataclass(slots=True)
class BedrockSuggestionProvider:
    """Placeholder for AWS Bedrock; request signing is not implemented."""

    slug: str = AIProviderKind.BEDROCK.value
    display_name: str = "AWS Bedrock"

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """Return ``None``; Bedrock generation requires SigV4 request signing."""
        logger.info("AWS Bedrock suggestions are not available yet")
        return None

    async def validate_config(self, config: AIConfig) -> bool:
        """Return ``True`` when both an access key and a region are configured."""
        return bool(config.api_key and config.api_key.strip()) and bool(
            config.region and config.region.strip()
        )


@dataclass(slots=True)
class CustomEndpointSuggestionProvider:
    """OpenAI-compatible provider posting to a caller supplied endpoint."""

    default_model: str = OPENAI_DEFAULT_MODEL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    slug: str = AIProviderKind.CUSTOM.value
    display_name: str = "Custom Endpoint"
    client_factory: Callable[[], httpx.AsyncClient] | None = None

    async def generate_suggestions(
        self,
        content: str,
        language: str,
        config: AIConfig,
    ) -> AISuggestions | None:
        """POST an OpenAI-format request to ``config.endpoint``."""
        endpoint = (config.endpoint or "").strip()
        if not endpoint:
            logger.warning("Custom AI provider requires an endpoint")
            return None
        payload = _chat_completion_payload(config.model or self.default_model, content, language)
        try:
            data = await _post_json(
                endpoint,
                payload,
                headers=_bearer_headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI suggestion error: %s", exc)
            return None
        return parse_suggestion_response(_extract_chat_text(data))

    async def validate_config(self, config: AIConfig) -> bool:
        """Send a one-token probe to ``config.endpoint``."""
        endpoint = (config.endpoint or "").strip()
        if not endpoint:
            return False
        try:
            await _post_json(
                endpoint,
                _chat_probe_payload(config.model or self.default_model),
                headers=_bearer_headers(config.api_key),
                timeout=self.timeout,
                client_factory=self.client_factory,
                provider_name=self.display_name,
            )
        except ProviderCallError as exc:
            logger.warning("AI configuration check failed: %s", exc)
            return False
        return True


def default_suggestion_providers(
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
) -> dict[AIProviderKind, SuggestionProvider]:
    """Return the built-in provider registry in display order."""
    return {
        AIProviderKind.OPENAI: OpenAISuggestionProvider(
            timeout=timeout, client_factory=client_factory
        ),
        AIProviderKind.ANTHROPIC: AnthropicSuggestionProvider(
            timeout=timeout, client_factory=client_factory
        ),
        AIProviderKind.BEDROCK: BedrockSuggestionProvider(),
        AIProviderKind.CUSTOM: CustomEndpointSuggestionProvider(
            timeout=timeout, client_factory=client_factory
        ),
    }


def resolve_suggestion_provider(
    providers: Mapping[AIProviderKind, SuggestionProvider],
    provider: AIProviderKind | str,
) -> SuggestionProvider | None:
    """Return the registered provider for *provider*, or ``None`` when unknown."""
    kind = AIProviderKind.parse(provider)
    if kind is None:
        return None
    return providers.get(kind)


__all__ = [
    "ANTHROPIC_API_VERSION",
    "ANTHROPIC_DEFAULT_MODEL",
    "DEFAULT_TIMEOUT_SECONDS",
    "OPENAI_DEFAULT_MODEL",
    "AnthropicSuggestionProvider",
    "BedrockSuggestionProvider",
    "CustomEndpointSuggestionProvider",
    "OpenAISuggestionProvider",
    "SuggestionProvider",
    "default_suggestion_providers",
    "resolve_suggestion_provider",
]
