"""Settings management utilities for PromptVault configuration.

Updates:
  v0.3.0 - 2026-10-04 - Add build_ai_config mapping the selected provider to credentials.
  v0.2.1 - 2026-09-30 - Accept comma separated default tags from the environment.
  v0.2.0 - 2026-09-28 - Add AI provider selection and per-provider credentials.
  v0.1.1 - 2026-09-18 - Load .env values so provider keys persist across shells.
  v0.1.0 - 2026-09-14 - Introduce storage location settings with JSON config support.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from core.suggestions.models import AIConfig, AIProviderKind
from core.suggestions.providers import ANTHROPIC_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL

_DOTENV_FALLBACK_PATH = ".env"
_STORAGE_MODES = {"global", "workspace", "custom"}

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_AI_TIMEOUT_SECONDS = 30.0

# Field name -> accepted keys (prefixed and, when upper case, bare).
_ENV_ALIASES: dict[str, list[str]] = {
    "storage_mode": ["STORAGE_MODE", "storage_mode"],
    "storage_path": ["STORAGE_PATH", "storage_path"],
    "workspace_path": ["WORKSPACE_PATH", "workspace_path"],
    "global_storage_dir": ["GLOBAL_STORAGE_DIR", "global_storage_dir"],
    "enable_ai": ["ENABLE_AI", "enable_ai", "ENABLE_AI_SUGGESTIONS"],
    "ai_provider": ["AI_PROVIDER", "ai_provider"],
    "ai_model": ["AI_MODEL", "ai_model"],
    "openai_api_key": ["OPENAI_API_KEY", "openai_api_key"],
    "anthropic_api_key": ["ANTHROPIC_API_KEY", "anthropic_api_key"],
    "aws_access_key": ["AWS_ACCESS_KEY", "aws_access_key", "AWS_ACCESS_KEY_ID"],
    "aws_region": ["AWS_REGION", "aws_region"],
    "custom_ai_api_key": ["CUSTOM_AI_API_KEY", "custom_ai_api_key"],
    "custom_ai_endpoint": ["CUSTOM_AI_ENDPOINT", "custom_ai_endpoint"],
    "default_tags": ["DEFAULT_TAGS", "default_tags"],
    "ai_timeout_seconds": ["AI_TIMEOUT_SECONDS", "ai_timeout_seconds"],
}

_SECRET_FIELDS = {
    "openai_api_key",
    "anthropic_api_key",
    "aws_access_key",
    "custom_ai_api_key",
}

_JSON_CONFIG_KEYS = (
    "storage_mode",
    "storage_path",
    "workspace_path",
    "global_storage_dir",
    "enable_ai",
    "ai_provider",
    "ai_model",
    "aws_region",
    "custom_ai_endpoint",
    "default_tags",
    "ai_timeout_seconds",
)


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv("PROMPTVAULT_ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when PromptVault configuration cannot be loaded or validated."""


class PromptVaultSettings(BaseSettings):
    """Application configuration sourced from keyword overrides, JSON, and environment."""

    storage_mode: Literal["global", "workspace", "custom"] = Field(
        default="global",
        description="Where prompts.json lives: global user data, workspace, or custom path.",
    )
    storage_path: Path | None = Field(
        default=None,
        description="Directory used when storage_mode is 'custom'.",
    )
    workspace_path: Path | None = Field(
        default=None,
        description="Workspace root; prompts live under <workspace>/.promptvault.",
    )
    global_storage_dir: Path | None = Field(
        default=None,
        description="Override for the per-user data directory ($XDG_DATA_HOME by default).",
    )
    enable_ai: bool = Field(
        default=False,
        description="Ask the configured AI provider for title and tag suggestions.",
    )
    ai_provider: AIProviderKind = Field(default=AIProviderKind.OPENAI)
    ai_model: str | None = Field(
        default=None,
        description="Model override; provider defaults apply when unset.",
    )
    openai_api_key: str | None = Field(default=None, repr=False)
    anthropic_api_key: str | None = Field(default=None, repr=False)
    aws_access_key: str | None = Field(default=None, repr=False)
    aws_region: str = Field(default=DEFAULT_AWS_REGION)
    custom_ai_api_key: str | None = Field(default=None, repr=False)
    custom_ai_endpoint: str | None = Field(default=None)
    default_tags: list[str] = Field(
        default_factory=list,
        description="Tags applied to new prompts when none are supplied.",
    )
    ai_timeout_seconds: float = Field(default=DEFAULT_AI_TIMEOUT_SECONDS)

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": "PROMPTVAULT_",
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("storage_mode", mode="before")
    def _normalise_storage_mode(cls, value: object | None) -> str:
        """Lower-case storage modes and default blanks to ``global``."""
        if value is None:
            return "global"
        text = str(value).strip().lower()
        if not text:
            return "global"
        if text not in _STORAGE_MODES:
            raise ValueError("storage_mode must be 'global', 'workspace', or 'custom'")
        return text

    @field_validator("storage_path", "workspace_path", "global_storage_dir", mode="before")
    def _normalise_optional_path(cls, value: Any) -> Path | None:
        """Expand user-relative paths and treat blanks as unset."""
        if value is None:
            return None
        text = str(value).strip()
        if not text:
            return None
        return Path(text).expanduser()

    @field_validator("ai_provider", mode="before")
    def _normalise_ai_provider(cls, value: object | None) -> AIProviderKind:
        """Accept provider identifiers case-insensitively."""
        if value is None or not str(value).strip():
            return AIProviderKind.OPENAI
        kind = AIProviderKind.parse(str(value))
        if kind is None:
            choices = ", ".join(item.value for item in AIProviderKind)
            raise ValueError(f"ai_provider must be one of: {choices}")
        return kind

    @field_validator(
        "ai_model",
        "openai_api_key",
        "anthropic_api_key",
        "aws_access_key",
        "custom_ai_api_key",
        "custom_ai_endpoint",
        mode="before",
    )
    def _strip_strings(cls, value: str | None) -> str | None:
        """Trim whitespace and collapse empty strings to ``None``."""
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("aws_region", mode="before")
    def _normalise_region(cls, value: str | None) -> str:
        """Fall back to the default region when blank."""
        if value is None:
            return DEFAULT_AWS_REGION
        return str(value).strip() or DEFAULT_AWS_REGION

    @field_validator("default_tags", mode="before")
    def _parse_default_tags(cls, value: object) -> list[str]:
        """Accept a list, a JSON array string, or a comma separated string."""
        if value is None:
            return []
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return []
            if text.startswith("["):
                try:
                    parsed = json.loads(text)
                except json.JSONDecodeError as exc:
                    raise ValueError("default_tags must be a JSON array of strings") from exc
                value = parsed
            else:
                return [part.strip() for part in text.split(",") if part.strip()]
        if isinstance(value, (list, tuple)):
            items = cast("list[object]", list(value))
            return [str(item).strip() for item in items if str(item).strip()]
        raise ValueError("default_tags must be a list or comma separated string")

    @field_validator("ai_timeout_seconds")
    def _validate_timeout(cls, value: float) -> float:
        """Ensure the provider timeout is positive."""
        if value <= 0:
            raise ValueError("ai_timeout_seconds must be greater than zero")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(storage_mode="custom")).
            2. JSON configuration file.
            3. Environment variables / aliases, then ``.env`` entries.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            config_dict = cast("dict[str, Any]", cls.model_config)
            prefix = str(config_dict.get("env_prefix", ""))
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    candidates = [f"{prefix}{key}", f"{prefix}{key.upper()}"]
                    if key.isupper():
                        candidates.append(key)
                    for candidate in candidates:
                        val = _lookup(candidate)
                        if val is None:
                            continue
                        data[field] = val
                        break
                    else:
                        continue
                    break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv("PROMPTVAULT_CONFIG_JSON")
            candidates: list[Path] = []
            if explicit_path:
                candidates.append(Path(explicit_path).expanduser())
            candidates.append((Path("config") / "config.json").expanduser())

            for path in candidates:
                if not path.exists():
                    if explicit_path and path == candidates[0]:
                        raise SettingsError(f"Configuration file not found: {path}")
                    continue
                try:
                    raw_contents = path.read_text(encoding="utf-8")
                except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
                    raise SettingsError(f"Unable to read configuration file: {path}") from exc
                try:
                    data = json.loads(raw_contents)
                except json.JSONDecodeError as exc:
                    raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
                if not isinstance(data, dict):
                    message = f"Configuration file {path} must contain a JSON object"
                    raise SettingsError(message)
                mapping_data = cast("Mapping[object, Any]", data)
                data_dict: dict[str, Any] = {str(key): value for key, value in mapping_data.items()}
                disallowed_secret_keys = _SECRET_FIELDS | {
                    "OPENAI_API_KEY",
                    "ANTHROPIC_API_KEY",
                    "AWS_ACCESS_KEY_ID",
                    "CUSTOM_AI_API_KEY",
                }
                removed_secrets = [
                    key
                    for key in disallowed_secret_keys
                    if key in data_dict and data_dict.pop(key, None) is not None
                ]
                if removed_secrets:
                    logger.warning(
                        "Ignoring secret key(s) %s in configuration file %s; "
                        "set credentials via environment variables instead.",
                        ", ".join(sorted(removed_secrets)),
                        path,
                    )
                return {key: data_dict[key] for key in _JSON_CONFIG_KEYS if key in data_dict}
            return {}

        return cast("PydanticBaseSettingsSource", _loader)


def load_settings(**overrides: Any) -> PromptVaultSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return PromptVaultSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError("Invalid PromptVault configuration") from exc


def build_ai_config(
    settings: PromptVaultSettings,
    *,
    provider: AIProviderKind | str | None = None,
) -> AIConfig:
    """Return the AIConfig for *provider* (or the configured provider).

    The API key is taken from the provider-specific credential field. An unknown
    *provider* string is passed through so that the suggestion service can reject it.
    """
    selected: AIProviderKind | str = provider if provider is not None else settings.ai_provider
    kind = AIProviderKind.parse(selected)
    if kind is AIProviderKind.ANTHROPIC:
        return AIConfig(
            provider=kind,
            api_key=settings.anthropic_api_key or "",
            model=settings.ai_model or ANTHROPIC_DEFAULT_MODEL,
        )
    if kind is AIProviderKind.BEDROCK:
        return AIConfig(
            provider=kind,
            api_key=settings.aws_access_key or "",
            model=settings.ai_model,
            region=settings.aws_region,
        )
    if kind is AIProviderKind.CUSTOM:
        return AIConfig(
            provider=kind,
            api_key=settings.custom_ai_api_key or "",
            model=settings.ai_model,
            endpoint=settings.custom_ai_endpoint,
        )
    if kind is AIProviderKind.OPENAI:
        return AIConfig(
            provider=kind,
            api_key=settings.openai_api_key or "",
            model=settings.ai_model or OPENAI_DEFAULT_MODEL,
        )
    return AIConfig(provider=str(selected), api_key="", model=settings.ai_model)


logger = logging.getLogger("promptvault.settings")


__all__ = [
    "DEFAULT_AI_TIMEOUT_SECONDS",
    "DEFAULT_AWS_REGION",
    "PromptVaultSettings",
    "SettingsError",
    "build_ai_config",
    "load_settings",
]
