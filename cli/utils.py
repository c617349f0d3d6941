"""Shared CLI utility functions for PromptVault commands.

Updates:
  v0.1.1 - 2026-09-24 - Add tag list parsing and prompt line formatting.
  v0.1.0 - 2026-09-14 - Extract stdout logging, masking, and path helpers.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    import argparse
    from logging import Logger

    from models.prompt_model import Prompt


def print_and_log(logger: Logger, level: int, message: str) -> None:
    """Log *message* at *level* and mirror it to stdout."""
    logger.log(level, message)
    print(message)


def mask_secret(value: str | None) -> str:
    """Return an obfuscated representation of secret configuration values."""
    if not value:
        return "not set"
    secret = value.strip()
    if len(secret) <= 6:
        return "set (****)"
    prefix = secret[:4]
    suffix = secret[-4:]
    return f"set ({prefix}...{suffix})"


def describe_path(path_value: object, *, expect_directory: bool) -> str:
    """Return a human-friendly description of *path_value* suitability."""
    try:
        path = Path(path_value) if path_value is not None else None
    except TypeError:
        path = None
    if path is None:
        return "not set"

    resolved = path.expanduser()
    if resolved.exists():
        if expect_directory and not resolved.is_dir():
            return f"{resolved} (exists but is not a directory)"
        if not expect_directory and resolved.is_dir():
            return f"{resolved} (exists but is a directory)"
        return f"{resolved} (exists)"
    if expect_directory:
        return f"{resolved} (missing - created on demand)"
    return f"{resolved} (missing)"


def parse_tag_list(value: str | None) -> list[str] | None:
    """Split a comma separated tag string; ``None`` means the option was omitted."""
    if value is None:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


def read_content(args: argparse.Namespace) -> str:
    """Return prompt text from ``--content``, ``--file``, or stdin."""
    inline = getattr(args, "content", None)
    if inline is not None:
        return inline
    content_file = getattr(args, "content_file", None)
    if content_file is not None:
        try:
            return Path(content_file).expanduser().read_text(encoding="utf-8")
        except OSError as exc:
            raise ValueError(f"Unable to read {content_file}: {exc}") from exc
    return sys.stdin.read()


def format_prompt_line(prompt: Prompt) -> str:
    """Return a one-line listing entry for *prompt*."""
    tags = ", ".join(prompt.tags) if prompt.tags else "-"
    updated = prompt.updated_at.strftime("%Y-%m-%d %H:%M")
    return f"{prompt.id}  {updated}  {prompt.title}  [{tags}]"


def format_size(size: int) -> str:
    """Return *size* bytes as a short human readable string."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


__all__ = [
    "describe_path",
    "format_prompt_line",
    "format_size",
    "mask_secret",
    "parse_tag_list",
    "print_and_log",
    "read_content",
]
