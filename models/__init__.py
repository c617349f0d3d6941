"""Data models for PromptVault.

Updates: v0.2.0 - 2026-09-21 - Export StorageInfo snapshot.
Updates: v0.1.0 - 2026-09-14 - Export Prompt and PromptInput dataclasses.
"""

from .prompt_model import Prompt, PromptInput, StorageInfo

__all__ = [
    "Prompt",
    "PromptInput",
    "StorageInfo",
]
