"""Application entry point for PromptVault.

Updates:
  v0.2.1 - 2026-10-19 - Return EXIT_OK from --print-settings.
  v0.2.0 - 2026-10-04 - Build the suggestion service for AI commands.
  v0.1.1 - 2026-09-24 - Map --storage-path and --workspace onto storage settings.
  v0.1.0 - 2026-09-14 - Wire settings, prompt store, and CLI commands.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from cli.commands import (
    COMMAND_SPECS,
    EXIT_FAILURE,
    EXIT_OK,
    EXIT_SETTINGS_ERROR,
    EXIT_STORAGE_INIT_ERROR,
    CommandContext,
)
from cli.parser import build_parser, parse_args
from cli.runtime import setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import PromptStorageError, build_prompt_store, build_suggestion_service

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    import argparse
    from collections.abc import Sequence

    from config import PromptVaultSettings
    from core import PromptStore


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Translate global storage flags into settings overrides."""
    overrides: dict[str, Any] = {}
    if args.storage_path is not None:
        overrides["storage_mode"] = "custom"
        overrides["storage_path"] = args.storage_path
    elif args.workspace is not None:
        overrides["storage_mode"] = "workspace"
        overrides["workspace_path"] = args.workspace
    return overrides


def _initialise_store(
    settings: PromptVaultSettings,
    logger: logging.Logger,
) -> PromptStore | None:
    try:
        store = build_prompt_store(settings)
    except PromptStorageError as exc:
        logger.error("Failed to initialise prompt storage: %s", exc)
        return None
    if store.load_warning:
        print(store.load_warning)
    return store


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("promptvault.main")
    try:
        settings = load_settings(**_settings_overrides(args))
    except SettingsError as exc:
        cause = exc.__cause__ or exc
        logger.error("Failed to load settings: %s", cause)
        return EXIT_SETTINGS_ERROR

    if args.print_settings:
        print_settings_summary(settings)
        return EXIT_OK

    command = getattr(args, "command", None)
    command_spec = COMMAND_SPECS.get(command)
    if command_spec is None:
        build_parser().print_help()
        return EXIT_FAILURE

    context = CommandContext(settings=settings, suggestions=build_suggestion_service(settings))
    if command_spec.requires_store:
        context.store = _initialise_store(settings, logger)
        if context.store is None:
            return EXIT_STORAGE_INIT_ERROR
    return command_spec.handler(context, args, logger)


if __name__ == "__main__":
    raise SystemExit(main())
