"""Clipboard support (macOS only, via pbcopy)."""

import subprocess
import sys


class ClipboardError(Exception):
    """Raised when text cannot be copied to the clipboard."""

    pass


def copy(text: str) -> None:
    """
    Copy text to the system clipboard.

    Raises:
        ClipboardError: On non-macOS platforms or if pbcopy fails
    """
    if sys.platform != "darwin":
        raise ClipboardError("clipboard copy is only supported on macOS")

    try:
        subprocess.run(["pbcopy"], input=text, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise ClipboardError(f"pbcopy failed: {e}") from e
