"""Runtime boot helpers for the PromptVault CLI.

Updates:
  v0.1.1 - 2026-10-04 - Add run_async helper for provider coroutines.
  v0.1.0 - 2026-09-14 - Extract logging configuration helpers.
"""

from __future__ import annotations

import asyncio
import logging
import logging.config
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import Any

T = TypeVar("T")

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    config_error: Exception | None = None
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (OSError, ValueError, KeyError, RuntimeError) as exc:
            config_error = exc
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if config_error is not None:
        logging.getLogger("promptvault.main").warning(
            "Ignoring invalid logging configuration %s: %s", path, config_error
        )


def run_async(coroutine: Coroutine[Any, Any, T]) -> T:
    """Run a provider coroutine to completion on a fresh event loop."""
    return asyncio.run(coroutine)


__all__ = ["DEFAULT_LOGGING_CONFIG", "run_async", "setup_logging"]
