"""Storage location resolution for the prompt collection.

Updates:
  v0.1.1 - 2026-09-18 - Honour XDG_DATA_HOME for the global fallback directory.
  v0.1.0 - 2026-09-14 - Extract custom/workspace/global directory resolution.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

StorageMode = Literal["global", "workspace", "custom"]

STORAGE_DIRNAME = "promptvault"
WORKSPACE_DIRNAME = ".promptvault"
PROMPTS_FILENAME = "prompts.json"

logger = logging.getLogger("promptvault.storage")


def default_global_storage_dir() -> Path:
    """Return the per-user data directory used when no workspace is configured."""
    base = os.environ.get("XDG_DATA_HOME")
    if base and base.strip():
        return Path(base).expanduser()
    return Path.home() / ".local" / "share"


def resolve_storage_dir(
    storage_mode: StorageMode | str = "global",
    *,
    storage_path: str | Path | None = None,
    workspace_path: str | Path | None = None,
    global_storage_dir: str | Path | None = None,
) -> Path:
    """Return the directory holding ``prompts.json`` for the given configuration.

    Priority is custom path, then workspace, then the global fallback. A custom
    mode without a path and a workspace mode without a workspace both fall back to
    global storage.
    """
    mode = (storage_mode or "global").strip().lower()
    custom = str(storage_path).strip() if storage_path is not None else ""
    if mode == "custom" and custom:
        logger.debug("Using custom storage path %s", custom)
        return Path(custom).expanduser()
    if mode == "workspace":
        if workspace_path is not None and str(workspace_path).strip():
            logger.debug("Using workspace storage under %s", workspace_path)
            return Path(workspace_path).expanduser() / WORKSPACE_DIRNAME
        logger.info("No workspace found, falling back to global storage")
    base = Path(global_storage_dir).expanduser() if global_storage_dir else None
    return (base or default_global_storage_dir()) / STORAGE_DIRNAME


def ensure_storage_dir(path: Path) -> Path:
    """Create *path* (recursively) when it does not exist yet."""
    if not path.exists():
        logger.info("Creating storage directory %s", path)
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "PROMPTS_FILENAME",
    "STORAGE_DIRNAME",
    "WORKSPACE_DIRNAME",
    "StorageMode",
    "default_global_storage_dir",
    "ensure_storage_dir",
    "resolve_storage_dir",
]
