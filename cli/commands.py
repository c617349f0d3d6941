"""CLI command handlers for PromptVault.

Every handler receives the shared :class:`CommandContext`, the parsed arguments,
and a logger, and returns a process exit code.

Updates:
  v0.2.0 - 2026-10-04 - Add suggest, validate-ai, and providers commands.
  v0.1.1 - 2026-09-24 - Add export/import commands with catalogue error mapping.
  v0.1.0 - 2026-09-14 - Introduce prompt CRUD and query commands.
"""

from __future__ import annotations

import argparse
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from config import build_ai_config
from core import (
    AIProviderKind,
    PromptNotFoundError,
    PromptStorageError,
    ProviderUnsupportedError,
)
from models.prompt_model import PromptInput

from .runtime import run_async
from .utils import (
    format_prompt_line,
    format_size,
    parse_tag_list,
    print_and_log,
    read_content,
)

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from config import PromptVaultSettings
    from core import AIConfig, AISuggestionService, PromptStore
    from models.prompt_model import Prompt

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_SETTINGS_ERROR = 2
EXIT_STORAGE_INIT_ERROR = 3
EXIT_NOT_FOUND = 4
EXIT_STORAGE_IO_ERROR = 5
EXIT_IMPORT_EXPORT_ERROR = 6
EXIT_UNSUPPORTED_PROVIDER = 7


@dataclass(slots=True)
class CommandContext:
    """Services shared by command handlers for one CLI invocation."""

    settings: PromptVaultSettings
    suggestions: AISuggestionService
    store: PromptStore | None = None

    def require_store(self) -> PromptStore:
        """Return the prompt store or fail when the command was dispatched without one."""
        if self.store is None:
            raise ValueError("Prompt store is required for this command.")
        return self.store


CommandHandler = Callable[[CommandContext, argparse.Namespace, logging.Logger], int]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for dispatching CLI command handlers."""

    handler: CommandHandler
    requires_store: bool = True


def _print_prompts(prompts: Sequence[Prompt], *, as_json: bool) -> None:
    if as_json:
        print(json.dumps([prompt.to_record() for prompt in prompts], ensure_ascii=False, indent=2))
        return
    if not prompts:
        print("No prompts found.")
        return
    for prompt in prompts:
        print(format_prompt_line(prompt))


def _ai_config_for(
    context: CommandContext,
    provider: str | None,
    *,
    offline: bool = False,
) -> AIConfig | None:
    if offline:
        return None
    if provider is None and not context.settings.enable_ai:
        return None
    return build_ai_config(context.settings, provider=provider)


def run_add(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    store = context.require_store()
    try:
        content = read_content(args)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_FAILURE
    if not content.strip():
        print_and_log(logger, logging.ERROR, "Prompt content is required.")
        return EXIT_FAILURE

    title = (args.title or "").strip()
    tags = parse_tag_list(args.tags)
    if tags is None and context.settings.default_tags:
        tags = list(context.settings.default_tags)
    if args.suggest and (not title or tags is None):
        try:
            suggestion = run_async(
                context.suggestions.suggest_or_fallback(
                    content,
                    args.language,
                    _ai_config_for(context, None),
                )
            )
        except ProviderUnsupportedError as exc:
            print_and_log(logger, logging.ERROR, str(exc))
            return EXIT_UNSUPPORTED_PROVIDER
        title = title or suggestion.title
        if tags is None:
            tags = suggestion.tags
    if not title:
        print_and_log(logger, logging.ERROR, "Prompt title is required (or pass --suggest).")
        return EXIT_FAILURE

    try:
        prompt = store.create_prompt(
            PromptInput(
                title=title,
                content=content,
                tags=tags or [],
                language=args.language,
                source=args.source,
                context=args.context,
            )
        )
    except PromptStorageError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_STORAGE_IO_ERROR
    print_and_log(logger, logging.INFO, f'Prompt "{prompt.title}" saved ({prompt.id})')
    return EXIT_OK


def run_list(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    _print_prompts(context.require_store().list_prompts(), as_json=args.json)
    return EXIT_OK


def run_show(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    prompt = context.require_store().get_prompt(args.prompt_id)
    if prompt is None:
        print_and_log(logger, logging.ERROR, f"Prompt not found: {args.prompt_id}")
        return EXIT_NOT_FOUND
    print(json.dumps(prompt.to_record(), ensure_ascii=False, indent=2))
    return EXIT_OK


def run_search(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    _print_prompts(context.require_store().search_prompts(args.term), as_json=args.json)
    return EXIT_OK


def run_tag(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del logger
    _print_prompts(context.require_store().prompts_by_tag(args.tag), as_json=args.json)
    return EXIT_OK


def run_tags(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del args, logger
    tags = context.require_store().all_tags()
    if not tags:
        print("No tags found.")
        return EXIT_OK
    for tag in tags:
        print(tag)
    return EXIT_OK


def run_update(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    store = context.require_store()
    tags = parse_tag_list(args.tags)
    if args.title is None and args.content is None and tags is None:
        message = "Nothing to update: pass --title, --content, or --tags."
        print_and_log(logger, logging.ERROR, message)
        return EXIT_FAILURE
    try:
        store.update_prompt(args.prompt_id, title=args.title, content=args.content, tags=tags)
    except PromptNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    except PromptStorageError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_STORAGE_IO_ERROR
    print_and_log(logger, logging.INFO, f"Prompt {args.prompt_id} updated")
    return EXIT_OK


def run_delete(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    store = context.require_store()
    try:
        store.delete_prompt(args.prompt_id)
    except PromptNotFoundError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_NOT_FOUND
    except PromptStorageError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_STORAGE_IO_ERROR
    print_and_log(logger, logging.INFO, f"Prompt {args.prompt_id} deleted")
    return EXIT_OK


def run_export(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    store = context.require_store()
    output_path = Path(args.path).expanduser()
    try:
        resolved = store.export_prompts(output_path, fmt=args.format)
    except (PromptStorageError, ValueError) as exc:
        print_and_log(logger, logging.ERROR, f"Failed to export prompts: {exc}")
        return EXIT_IMPORT_EXPORT_ERROR
    print_and_log(logger, logging.INFO, f"Exported {len(store)} prompts to {resolved}")
    return EXIT_OK


def run_import(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    store = context.require_store()
    try:
        imported = store.import_prompts(Path(args.path).expanduser())
    except PromptStorageError as exc:
        print_and_log(logger, logging.ERROR, f"Failed to import prompts: {exc}")
        return EXIT_IMPORT_EXPORT_ERROR
    print_and_log(logger, logging.INFO, f"Successfully imported {imported} prompts")
    return EXIT_OK


def run_suggest(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    try:
        content = read_content(args)
    except ValueError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_FAILURE
    config = _ai_config_for(context, args.provider, offline=args.offline)
    try:
        suggestion = run_async(
            context.suggestions.suggest_or_fallback(content, args.language, config)
        )
    except ProviderUnsupportedError as exc:
        print_and_log(logger, logging.ERROR, str(exc))
        return EXIT_UNSUPPORTED_PROVIDER
    print(json.dumps({"title": suggestion.title, "tags": suggestion.tags}, ensure_ascii=False))
    return EXIT_OK


def run_validate_ai(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    provider = args.provider if args.provider is not None else context.settings.ai_provider
    if AIProviderKind.parse(provider) is None:
        print_and_log(logger, logging.ERROR, f"Unsupported AI provider: {provider}")
        return EXIT_UNSUPPORTED_PROVIDER
    config = build_ai_config(context.settings, provider=provider)
    valid = run_async(context.suggestions.validate_config(config))
    if valid:
        print_and_log(logger, logging.INFO, f"{config.provider} configuration is valid")
        return EXIT_OK
    print_and_log(logger, logging.WARNING, f"{config.provider} configuration is not valid")
    return EXIT_FAILURE


def run_providers(
    context: CommandContext,
    args: argparse.Namespace,
    logger: logging.Logger,
) -> int:
    del args, logger
    selected = context.settings.ai_provider.value
    for descriptor in context.suggestions.list_providers():
        marker = "*" if descriptor.slug == selected else " "
        print(f"{marker} {descriptor.slug:<10} {descriptor.display_name}")
    return EXIT_OK


def run_info(context: CommandContext, args: argparse.Namespace, logger: logging.Logger) -> int:
    del args, logger
    info = context.require_store().storage_info()
    print(f"Storage path: {info.path}")
    print(f"Prompts: {info.count}")
    print(f"File size: {format_size(info.size)}")
    return EXIT_OK


COMMAND_SPECS: dict[str | None, CommandSpec] = {
    "add": CommandSpec(run_add),
    "list": CommandSpec(run_list),
    "show": CommandSpec(run_show),
    "search": CommandSpec(run_search),
    "tag": CommandSpec(run_tag),
    "tags": CommandSpec(run_tags),
    "update": CommandSpec(run_update),
    "delete": CommandSpec(run_delete),
    "export": CommandSpec(run_export),
    "import": CommandSpec(run_import),
    "suggest": CommandSpec(run_suggest, requires_store=False),
    "validate-ai": CommandSpec(run_validate_ai, requires_store=False),
    "providers": CommandSpec(run_providers, requires_store=False),
    "info": CommandSpec(run_info),
}


__all__ = [
    "COMMAND_SPECS",
    "EXIT_FAILURE",
    "EXIT_IMPORT_EXPORT_ERROR",
    "EXIT_NOT_FOUND",
    "EXIT_OK",
    "EXIT_SETTINGS_ERROR",
    "EXIT_STORAGE_INIT_ERROR",
    "EXIT_STORAGE_IO_ERROR",
    "EXIT_UNSUPPORTED_PROVIDER",
    "CommandContext",
    "CommandSpec",
]
