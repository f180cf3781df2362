"""Obsidian vault detection.

When stamp runs inside an Obsidian vault, the date formats configured for
the Daily Notes core plugin and the Unique Note Creator community plugin are
borrowed so generated names match the vault's conventions.
"""

import json
import logging
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from stamp.vault.layout import moment_to_strftime

logger = logging.getLogger(__name__)

OBSIDIAN_DIR = ".obsidian"
DAILY_NOTES_PLUGIN = "daily-notes"
UNIQUE_NOTE_PLUGIN = "unique-note-creator"

# Characters that mark a string as a Moment.js date format
_MOMENT_CHARS = frozenset("YMDHhms")


@dataclass(frozen=True)
class Layouts:
    """strftime templates discovered in the vault (empty when absent)."""

    default: str = ""
    daily: str = ""


@dataclass(frozen=True)
class DetectResult:
    """Detected Obsidian metadata for a working directory."""

    in_vault: bool
    vault_path: Path | None = None
    layouts: Layouts = field(default_factory=Layouts)


def detect(start_path: Path | str) -> DetectResult:
    """
    Find the vault containing start_path and extract its date layouts.

    Args:
        start_path: Directory to start from (need not exist)

    Returns:
        DetectResult; in_vault is False outside any vault

    Raises:
        OSError: If a parent directory cannot be inspected
    """
    vault_path = find_vault(Path(start_path).absolute())
    if vault_path is None:
        return DetectResult(in_vault=False)

    logger.debug("Obsidian vault detected at %s", vault_path)
    return DetectResult(
        in_vault=True,
        vault_path=vault_path,
        layouts=collect_layouts(vault_path),
    )


def find_vault(start: Path) -> Path | None:
    """Walk up from start looking for a directory holding .obsidian/."""
    for current in (start, *start.parents):
        candidate = current / OBSIDIAN_DIR
        try:
            mode = candidate.stat().st_mode
        except (FileNotFoundError, NotADirectoryError):
            continue
        if stat.S_ISDIR(mode):
            return current
    return None


def collect_layouts(vault_path: Path) -> Layouts:
    """
    Read plugin formats, skipping (and logging) any plugin that fails.

    Returns:
        Layouts with whichever templates could be translated
    """
    daily = ""
    default = ""

    try:
        fmt = detect_daily_notes_format(vault_path)
    except (OSError, ValueError) as e:
        logger.warning("Obsidian detection warning: %s", e)
    else:
        if fmt:
            daily = moment_to_strftime(fmt) or ""

    try:
        fmt = detect_unique_note_format(vault_path)
    except (OSError, ValueError) as e:
        logger.warning("Obsidian detection warning: %s", e)
    else:
        if fmt:
            default = moment_to_strftime(fmt) or ""

    return Layouts(default=default, daily=daily)


def detect_daily_notes_format(vault_path: Path) -> str:
    """Return the Daily Notes format, or "" when the plugin is disabled."""
    obsidian = vault_path / OBSIDIAN_DIR
    if not is_core_plugin_enabled(vault_path, DAILY_NOTES_PLUGIN):
        return ""

    try:
        fmt = _read_object(obsidian / "daily-notes.json").get("format")
    except FileNotFoundError:
        fmt = None
    if isinstance(fmt, str) and fmt:
        return fmt

    try:
        daily_notes = _read_object(obsidian / "app.json").get("dailyNotes")
    except FileNotFoundError:
        daily_notes = None
    if isinstance(daily_notes, dict):
        fmt = daily_notes.get("format")
        if isinstance(fmt, str) and fmt:
            return fmt

    return ""


def detect_unique_note_format(vault_path: Path) -> str:
    """Return the Unique Note Creator format, or "" when unavailable."""
    plugin_dir = vault_path / OBSIDIAN_DIR / "plugins" / UNIQUE_NOTE_PLUGIN
    if not (
        is_community_plugin_enabled(vault_path, UNIQUE_NOTE_PLUGIN)
        or plugin_dir.is_dir()
    ):
        return ""

    try:
        raw = (plugin_dir / "data.json").read_text(encoding="utf-8")
    except FileNotFoundError:
        return ""

    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return ""
    return find_format(data) or ""


def is_core_plugin_enabled(vault_path: Path, plugin_id: str) -> bool:
    return plugin_id in _load_plugin_list(
        vault_path / OBSIDIAN_DIR / "core-plugins.json"
    )


def is_community_plugin_enabled(vault_path: Path, plugin_id: str) -> bool:
    return plugin_id in _load_plugin_list(
        vault_path / OBSIDIAN_DIR / "community-plugins.json"
    )


def _load_plugin_list(path: Path) -> list[str]:
    try:
        ids = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []
    if not isinstance(ids, list):
        return []
    return [i for i in ids if isinstance(i, str)]


def _read_object(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain an object")
    return data


def find_format(node: Any) -> str | None:
    """
    Search parsed plugin data for a Moment.js format string.

    Keys containing "format" are checked first at each level, then nested
    values are searched depth-first.
    """
    if isinstance(node, dict):
        for key, value in node.items():
            if (
                "format" in key.lower()
                and isinstance(value, str)
                and looks_like_moment_format(value)
            ):
                return value
        for value in node.values():
            found = find_format(value)
            if found:
                return found
    elif isinstance(node, list):
        for item in node:
            found = find_format(item)
            if found:
                return found
    elif isinstance(node, str) and looks_like_moment_format(node):
        return node
    return None


def looks_like_moment_format(value: str) -> bool:
    return any(c in _MOMENT_CHARS for c in value)
