"""Configuration helpers for PromptVault.

Updates: v0.2.0 - 2026-10-04 - Expose build_ai_config for provider wiring.
Updates: v0.1.0 - 2026-09-14 - Expose settings loader and configuration error types.
"""

from .settings import (
    DEFAULT_AI_TIMEOUT_SECONDS,
    DEFAULT_AWS_REGION,
    PromptVaultSettings,
    SettingsError,
    build_ai_config,
    load_settings,
)

__all__ = [
    "DEFAULT_AI_TIMEOUT_SECONDS",
    "DEFAULT_AWS_REGION",
    "PromptVaultSettings",
    "SettingsError",
    "build_ai_config",
    "load_settings",
]
