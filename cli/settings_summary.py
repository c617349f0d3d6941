"""Printable summaries for PromptVault configuration.

Updates:
  v0.1.1 - 2026-10-04 - Surface AI provider credentials in CLI summaries.
  v0.1.0 - 2026-09-14 - Extract CLI settings summary rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.factory import resolve_settings_storage_dir

from .utils import describe_path, mask_secret

if TYPE_CHECKING:
    from config import PromptVaultSettings


def print_settings_summary(settings: PromptVaultSettings) -> None:
    """Emit a readable summary of storage and AI provider configuration."""
    storage_dir_desc = describe_path(
        resolve_settings_storage_dir(settings),
        expect_directory=True,
    )
    default_tags = ", ".join(settings.default_tags) if settings.default_tags else "none"

    lines = [
        "PromptVault configuration summary",
        "---------------------------------",
        f"Storage mode: {settings.storage_mode}",
        f"Storage directory: {storage_dir_desc}",
        f"Custom storage path: {settings.storage_path or 'not set'}",
        f"Workspace: {settings.workspace_path or 'not set'}",
        f"Default tags: {default_tags}",
        "",
        "AI suggestions",
        "--------------",
        f"Enabled: {'yes' if settings.enable_ai else 'no'}",
        f"Provider: {settings.ai_provider.value}",
        f"Model override: {settings.ai_model or 'provider default'}",
        f"Request timeout (seconds): {settings.ai_timeout_seconds:g}",
        f"OpenAI API key: {mask_secret(settings.openai_api_key)}",
        f"Anthropic API key: {mask_secret(settings.anthropic_api_key)}",
        f"AWS access key: {mask_secret(settings.aws_access_key)}",
        f"AWS region: {settings.aws_region}",
        f"Custom API key: {mask_secret(settings.custom_ai_api_key)}",
        f"Custom endpoint: {settings.custom_ai_endpoint or 'not set'}",
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
