"""Tests for configuration loading and validation logic.

Updates:
  v0.2.0 - 2026-10-04 - Cover build_ai_config provider mapping and timeouts.
  v0.1.2 - 2026-09-30 - Cover comma separated and JSON default tags.
  v0.1.1 - 2026-09-28 - Warn and ignore provider secrets supplied via JSON configuration.
  v0.1.0 - 2026-09-14 - Cover JSON/env precedence and validation errors.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pytest import LogCaptureFixture, MonkeyPatch

from config import PromptVaultSettings, SettingsError, build_ai_config, load_settings
from config.settings import DEFAULT_AI_TIMEOUT_SECONDS, DEFAULT_AWS_REGION
from core.suggestions import AIProviderKind
from core.suggestions.providers import ANTHROPIC_DEFAULT_MODEL, OPENAI_DEFAULT_MODEL

REPO_ROOT = Path(__file__).resolve().parents[1]


def _write_config(tmp_path: Path, payload: dict[str, object]) -> Path:
    config_path = tmp_path / "settings.json"
    config_path.write_text(json.dumps(payload), encoding="utf-8")
    return config_path


def test_defaults_without_configuration() -> None:
    """An empty environment yields global storage with AI disabled."""
    settings = load_settings()

    assert isinstance(settings, PromptVaultSettings)
    assert settings.storage_mode == "global"
    assert settings.storage_path is None
    assert settings.enable_ai is False
    assert settings.ai_provider is AIProviderKind.OPENAI
    assert settings.aws_region == DEFAULT_AWS_REGION
    assert settings.default_tags == []
    assert settings.ai_timeout_seconds == DEFAULT_AI_TIMEOUT_SECONDS


def test_load_settings_reads_json_and_env(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """JSON configuration is loaded and the environment fills missing values."""
    config_path = _write_config(
        tmp_path,
        {"storage_mode": "custom", "storage_path": str(tmp_path / "from_json")},
    )
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(config_path))
    monkeypatch.setenv("PROMPTVAULT_AI_PROVIDER", "Anthropic")

    settings = load_settings()

    assert settings.storage_mode == "custom"
    assert settings.storage_path == tmp_path / "from_json"
    assert settings.ai_provider is AIProviderKind.ANTHROPIC


def test_json_precedes_env_when_both_provided(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """JSON values override environment variables for overlapping keys."""
    template_path = REPO_ROOT / "config" / "config.template.json"
    assert template_path.exists(), "template config should exist"
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(template_path))
    monkeypatch.setenv("PROMPTVAULT_STORAGE_MODE", "workspace")
    monkeypatch.setenv("PROMPTVAULT_AI_TIMEOUT_SECONDS", "5")

    settings = load_settings()

    assert settings.storage_mode == "global"
    assert settings.ai_timeout_seconds == 30


def test_keyword_overrides_take_precedence(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Explicit keyword arguments beat the environment."""
    monkeypatch.setenv("PROMPTVAULT_STORAGE_MODE", "workspace")

    settings = load_settings(storage_mode="custom", storage_path=tmp_path / "explicit")

    assert settings.storage_mode == "custom"
    assert settings.storage_path == tmp_path / "explicit"


def test_default_config_json_in_working_directory(tmp_path: Path) -> None:
    """config/config.json relative to the working directory is read when present."""
    config_dir = Path("config")
    config_dir.mkdir()
    (config_dir / "config.json").write_text(
        json.dumps({"enable_ai": True, "default_tags": ["team"]}),
        encoding="utf-8",
    )

    settings = load_settings()

    assert settings.enable_ai is True
    assert settings.default_tags == ["team"]


def test_json_with_api_key_is_ignored(
    monkeypatch: MonkeyPatch,
    tmp_path: Path,
    caplog: LogCaptureFixture,
) -> None:
    """Provider secrets present in JSON configs are dropped with a warning."""
    config_path = _write_config(
        tmp_path,
        {"ai_provider": "openai", "openai_api_key": "from-json", "OPENAI_API_KEY": "x"},
    )
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(config_path))

    with caplog.at_level(logging.WARNING, logger="promptvault.settings"):
        settings = load_settings()

    assert settings.openai_api_key is None
    assert "Ignoring secret key(s)" in caplog.text
    assert "from-json" not in caplog.text


def test_bare_provider_aliases_are_accepted(monkeypatch: MonkeyPatch) -> None:
    """Conventional provider variables such as OPENAI_API_KEY are honoured."""
    monkeypatch.setenv("OPENAI_API_KEY", "  sk-openai  ")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIA")
    monkeypatch.setenv("ENABLE_AI_SUGGESTIONS", "true")

    settings = load_settings()

    assert settings.openai_api_key == "sk-openai"
    assert settings.anthropic_api_key == "sk-ant"
    assert settings.aws_access_key == "AKIA"
    assert settings.enable_ai is True


def test_prefixed_variable_wins_over_bare_alias(monkeypatch: MonkeyPatch) -> None:
    """PROMPTVAULT_ prefixed variables are checked before bare aliases."""
    monkeypatch.setenv("OPENAI_API_KEY", "bare")
    monkeypatch.setenv("PROMPTVAULT_OPENAI_API_KEY", "prefixed")

    assert load_settings().openai_api_key == "prefixed"


def test_dotenv_file_supplies_values(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Values from the .env file named by PROMPTVAULT_ENV_FILE are loaded."""
    env_file = tmp_path / "custom.env"
    env_file.write_text("ANTHROPIC_API_KEY=from-dotenv\nPROMPTVAULT_AI_PROVIDER=anthropic\n")
    monkeypatch.setenv("PROMPTVAULT_ENV_FILE", str(env_file))

    settings = load_settings()

    assert settings.anthropic_api_key == "from-dotenv"
    assert settings.ai_provider is AIProviderKind.ANTHROPIC


def test_environment_beats_dotenv(monkeypatch: MonkeyPatch) -> None:
    """Process environment variables override .env entries."""
    Path(".env").write_text("PROMPTVAULT_AI_MODEL=from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("PROMPTVAULT_AI_MODEL", "from-env")

    assert load_settings().ai_model == "from-env"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("alpha, beta ,,gamma", ["alpha", "beta", "gamma"]),
        ('["one", " two "]', ["one", "two"]),
        ("", []),
    ],
)
def test_default_tags_parsing(monkeypatch: MonkeyPatch, raw: str, expected: list[str]) -> None:
    """Default tags accept comma separated and JSON array strings."""
    monkeypatch.setenv("PROMPTVAULT_DEFAULT_TAGS", raw)

    assert load_settings().default_tags == expected


def test_invalid_storage_mode_raises(monkeypatch: MonkeyPatch) -> None:
    """Unknown storage modes surface as SettingsError."""
    monkeypatch.setenv("PROMPTVAULT_STORAGE_MODE", "cloud")

    with pytest.raises(SettingsError):
        load_settings()


def test_invalid_ai_provider_raises(monkeypatch: MonkeyPatch) -> None:
    """Unknown AI providers in configuration surface as SettingsError."""
    monkeypatch.setenv("PROMPTVAULT_AI_PROVIDER", "gemini")

    with pytest.raises(SettingsError):
        load_settings()


def test_non_positive_timeout_raises() -> None:
    """The provider timeout must be positive."""
    with pytest.raises(SettingsError):
        load_settings(ai_timeout_seconds=0)


def test_missing_explicit_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """An explicit PROMPTVAULT_CONFIG_JSON that does not exist is an error."""
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(tmp_path / "missing.json"))

    with pytest.raises(SettingsError, match="not found"):
        load_settings()


def test_malformed_config_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """Invalid JSON and non-object payloads are rejected."""
    bad_json = tmp_path / "bad.json"
    bad_json.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(bad_json))
    with pytest.raises(SettingsError, match="Invalid JSON"):
        load_settings()

    as_list = tmp_path / "list.json"
    as_list.write_text("[1, 2]", encoding="utf-8")
    monkeypatch.setenv("PROMPTVAULT_CONFIG_JSON", str(as_list))
    with pytest.raises(SettingsError, match="JSON object"):
        load_settings()


def test_build_ai_config_uses_provider_specific_credentials() -> None:
    """Each provider receives its own key and default model."""
    settings = load_settings(
        openai_api_key="sk-openai",
        anthropic_api_key="sk-ant",
        aws_access_key="AKIA",
        aws_region="eu-west-1",
        custom_ai_api_key="custom-key",
        custom_ai_endpoint="https://llm.example.com/v1",
    )

    openai = build_ai_config(settings)
    anthropic = build_ai_config(settings, provider="anthropic")
    bedrock = build_ai_config(settings, provider=AIProviderKind.BEDROCK)
    custom = build_ai_config(settings, provider="CUSTOM")

    assert (openai.provider, openai.api_key, openai.model) == (
        AIProviderKind.OPENAI,
        "sk-openai",
        OPENAI_DEFAULT_MODEL,
    )
    assert (anthropic.api_key, anthropic.model) == ("sk-ant", ANTHROPIC_DEFAULT_MODEL)
    assert (bedrock.api_key, bedrock.region) == ("AKIA", "eu-west-1")
    assert (custom.api_key, custom.endpoint) == ("custom-key", "https://llm.example.com/v1")


def test_build_ai_config_honours_model_override() -> None:
    """ai_model replaces the provider default."""
    settings = load_settings(ai_model="gpt-4o-mini")

    config = build_ai_config(settings)

    assert config.model == "gpt-4o-mini"
    assert config.api_key == ""


def test_build_ai_config_passes_unknown_provider_through() -> None:
    """Unknown provider overrides are kept verbatim for the service to reject."""
    config = build_ai_config(load_settings(openai_api_key="sk"), provider="gemini")

    assert config.provider == "gemini"
    assert config.api_key == ""
