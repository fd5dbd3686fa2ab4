"""Editor launch helper for live catalog edits.

Runs ``$EDITOR`` (or ``vim``) while temporarily leaving raw/alternate-screen
TUI mode. Returns an error message string instead of raising for UI-friendly
handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

DEFAULT_EDITOR = "vim"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditorResult:
    returncode: int | None
    error: str | None = None


def resolve_editor(environ: dict[str, str] | None = None) -> tuple[str, ...]:
    """Return the editor argv prefix from ``$EDITOR``, defaulting to ``vim``."""
    env = os.environ if environ is None else environ
    editor_env = env.get("EDITOR", "").strip()
    if not editor_env:
        return (DEFAULT_EDITOR,)
    try:
        cmd = shlex.split(editor_env)
    except ValueError:
        cmd = editor_env.split()
    return tuple(cmd) if cmd else (DEFAULT_EDITOR,)


def launch_editor(
    program: tuple[str, ...],
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
) -> EditorResult:
    """Run the editor on ``target`` and block until it exits."""
    disable_tui_mode()
    try:
        proc = subprocess.run([*program, str(target)], check=False)
    except OSError as exc:
        logger.warning("failed to launch editor %s: %s", program[0], exc)
        return EditorResult(returncode=None, error=f"Failed to launch editor: {exc}")
    finally:
        enable_tui_mode()
    logger.debug("editor %s exited with %s", program[0], proc.returncode)
    return EditorResult(returncode=proc.returncode)
