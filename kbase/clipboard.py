"""Best-effort system clipboard writes through platform command-line tools."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

from .errors import ClipboardUnavailable

logger = logging.getLogger(__name__)


def clipboard_commands() -> list[list[str]]:
    """Return candidate clipboard writer commands for the running platform."""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_text_to_clipboard(text: str) -> bool:
    """Best-effort clipboard copy across macOS, Windows, and common Linux tools."""
    if not text:
        return False

    for command in clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(
                command,
                input=text,
                text=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except OSError as exc:
            logger.debug("clipboard tool %s failed: %s", command[0], exc)
            continue
        if proc.returncode == 0:
            return True
    return False


def copy_or_raise(text: str) -> None:
    """Copy ``text`` or raise ``ClipboardUnavailable`` when no tool succeeds."""
    if not copy_text_to_clipboard(text):
        raise ClipboardUnavailable("no clipboard tool accepted the text")
