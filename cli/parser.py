"""Argument parser for the PromptVault CLI.

Updates:
  v0.2.0 - 2026-10-04 - Add suggest, validate-ai, and providers subcommands.
  v0.1.1 - 2026-09-24 - Add export/import subcommands with YAML support.
  v0.1.0 - 2026-09-14 - Introduce prompt CRUD and query subcommands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


def _add_content_arguments(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--content",
        type=str,
        default=None,
        help="Prompt text (omit to use --file or read from stdin).",
    )
    source.add_argument(
        "--file",
        dest="content_file",
        type=Path,
        default=None,
        help="Path to a UTF-8 text file whose contents become the prompt text.",
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the configured argument parser."""
    parser = argparse.ArgumentParser(
        prog="promptvault",
        description="PromptVault prompt library",
    )
    parser.add_argument(
        "--logging-config",
        type=Path,
        default=None,
        help="Path to logging configuration file (INI format)",
    )
    parser.add_argument(
        "--print-settings",
        action="store_true",
        help="Print resolved settings and exit",
    )
    parser.add_argument(
        "--storage-path",
        type=Path,
        default=None,
        help="Store prompts in this directory (implies custom storage mode).",
    )
    parser.add_argument(
        "--workspace",
        type=Path,
        default=None,
        help="Store prompts under <workspace>/.promptvault (implies workspace mode).",
    )

    subparsers = parser.add_subparsers(dest="command")

    add_parser = subparsers.add_parser("add", help="Save a new prompt.")
    add_parser.add_argument("--title", type=str, default=None, help="Prompt title.")
    _add_content_arguments(add_parser)
    add_parser.add_argument(
        "--tags",
        type=str,
        default=None,
        help="Comma separated tags (defaults to configured tags or suggestions).",
    )
    add_parser.add_argument("--language", type=str, default="text", help="Content language.")
    add_parser.add_argument("--source", type=str, default="manual", help="Provenance label.")
    add_parser.add_argument("--context", type=str, default="", help="Free-form context.")
    add_parser.add_argument(
        "--suggest",
        action="store_true",
        help="Fill a missing title or tags from AI (when enabled) or keyword suggestions.",
    )

    list_parser = subparsers.add_parser("list", help="List prompts, most recently updated first.")
    list_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    show_parser = subparsers.add_parser("show", help="Display a single prompt.")
    show_parser.add_argument("prompt_id", type=str, help="Prompt identifier.")

    search_parser = subparsers.add_parser(
        "search",
        help="Case-insensitive search across titles, content, and tags.",
    )
    search_parser.add_argument("term", type=str, help="Search term.")
    search_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    tag_parser = subparsers.add_parser("tag", help="List prompts carrying an exact tag.")
    tag_parser.add_argument("tag", type=str, help="Tag to match (case-sensitive).")
    tag_parser.add_argument("--json", action="store_true", help="Emit JSON records.")

    subparsers.add_parser("tags", help="List every distinct tag.")

    update_parser = subparsers.add_parser("update", help="Edit an existing prompt.")
    update_parser.add_argument("prompt_id", type=str, help="Prompt identifier.")
    update_parser.add_argument("--title", type=str, default=None, help="New title.")
    update_parser.add_argument("--content", type=str, default=None, help="New prompt text.")
    update_parser.add_argument(
        "--tags",
        type=str,
        default=None,
        help="Replacement comma separated tags (pass an empty string to clear).",
    )

    delete_parser = subparsers.add_parser("delete", help="Delete a prompt.")
    delete_parser.add_argument("prompt_id", type=str, help="Prompt identifier.")

    export_parser = subparsers.add_parser(
        "export",
        help="Export all prompts to a JSON or YAML envelope.",
    )
    export_parser.add_argument("path", type=Path, help="Destination file path (.json or .yaml)")
    export_parser.add_argument(
        "--format",
        choices=("json", "yaml"),
        default=None,
        help="Explicit output format (defaults based on file extension).",
    )

    import_parser = subparsers.add_parser(
        "import",
        help="Import prompts from an export envelope or a bare list.",
    )
    import_parser.add_argument("path", type=Path, help="Source file path (.json or .yaml)")

    suggest_parser = subparsers.add_parser(
        "suggest",
        help="Suggest a title and tags for prompt text.",
    )
    _add_content_arguments(suggest_parser)
    suggest_parser.add_argument("--language", type=str, default="text", help="Content language.")
    suggest_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="AI provider override (openai, anthropic, bedrock, custom).",
    )
    suggest_parser.add_argument(
        "--offline",
        action="store_true",
        help="Skip AI providers and use keyword suggestions only.",
    )

    validate_parser = subparsers.add_parser(
        "validate-ai",
        help="Check whether the configured AI credentials are accepted.",
    )
    validate_parser.add_argument(
        "--provider",
        type=str,
        default=None,
        help="AI provider override (openai, anthropic, bedrock, custom).",
    )

    subparsers.add_parser("providers", help="List available AI suggestion providers.")
    subparsers.add_parser("info", help="Show the storage location, prompt count, and file size.")

    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return parsed CLI arguments for the PromptVault launcher."""
    return build_parser().parse_args(argv)


__all__ = ["build_parser", "parse_args"]
