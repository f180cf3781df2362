"""Vault module - Obsidian vault detection and date layout translation.

Running stamp inside an Obsidian vault borrows the vault's date formats:
- Daily Notes core plugin format for `stamp daily`
- Unique Note Creator format for the default timestamp
"""

from stamp.vault.detect import DetectResult, Layouts, detect
from stamp.vault.layout import moment_to_strftime

__all__ = [
    "DetectResult",
    "Layouts",
    "detect",
    "moment_to_strftime",
]
