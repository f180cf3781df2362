"""Sequential codes derived from directory entries.

The directory listing is the source of truth: nothing is stored between
calls, and every call rescans. Entry names are matched against the spec
prefix (case-insensitive) followed by a run of ASCII digits, e.g. with
prefix "P" the names "P0012 Roadmap.md" and "p0013" yield 12 and 13.
"""

import logging
from pathlib import Path

from stamp.core.types import NumberedCode, SequentialSpec

logger = logging.getLogger(__name__)

_ASCII_DIGITS = frozenset("0123456789")


def parse_name(name: str, spec: SequentialSpec) -> int | None:
    """
    Extract the numeric part of an entry name.

    Args:
        name: Entry name (file or directory)
        spec: Sequential spec supplying the prefix

    Returns:
        The integer following the prefix, or None when the name doesn't match
    """
    prefix = spec.normalized().prefix
    if len(name) < len(prefix):
        return None
    if name[: len(prefix)].casefold() != prefix.casefold():
        return None

    rest = name[len(prefix) :]
    end = 0
    while end < len(rest) and rest[end] in _ASCII_DIGITS:
        end += 1

    if end == 0:
        return None
    return int(rest[:end])


def highest(directory: Path | str, spec: SequentialSpec) -> int:
    """
    Return the highest number matching the spec among the directory entries.

    Args:
        directory: Directory to scan (non-recursive, hidden entries included)
        spec: Sequential spec

    Returns:
        Highest matched value, 0 when nothing matches

    Raises:
        OSError: If the directory cannot be listed
    """
    spec = spec.normalized()

    max_value = 0
    for entry in Path(directory).iterdir():
        value = parse_name(entry.name, spec)
        if value is not None and value > max_value:
            max_value = value

    logger.debug("Highest %s entry in %s: %d", spec.prefix, directory, max_value)
    return max_value


def next_code(directory: Path | str, spec: SequentialSpec) -> NumberedCode:
    """
    Compute the next sequential code for the directory.

    When the directory's highest match is below spec.start the sequence
    begins at start instead of highest + 1.

    Returns:
        NumberedCode with the formatted code and its value
    """
    spec = spec.normalized()

    current = highest(directory, spec)
    value = current + 1 if current >= spec.start else spec.start

    return NumberedCode(format_code(spec, value), value)


def format_code(spec: SequentialSpec, value: int) -> str:
    """Render value as prefix + zero-padded number (never truncated)."""
    spec = spec.normalized()
    return f"{spec.prefix}{value:0{spec.width}d}"
