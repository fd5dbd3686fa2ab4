"""Executes engine commands against the real terminal, clipboard, and editor.

Each ``execute`` call performs one side effect and may hand back the event
that reports its outcome (clipboard result, editor exit) to the engine.
"""

from __future__ import annotations

import logging
import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

from ..clipboard import copy_or_raise
from ..editor import EditorResult, launch_editor
from ..errors import ClipboardUnavailable
from ..events import (
    ClipboardResultEvent,
    Command,
    CopyToClipboardCommand,
    EditorClosedEvent,
    EmitStdoutCommand,
    Event,
    LaunchEditorCommand,
    QuitCommand,
    ScheduleTickCommand,
)
from .terminal import TerminalController

logger = logging.getLogger(__name__)


class CommandRunner:
    """Side-effect executor owned by the main loop."""

    def __init__(
        self,
        terminal: TerminalController,
        *,
        copy_text: Callable[[str], None] = copy_or_raise,
        run_editor: Callable[..., EditorResult] = launch_editor,
        stdout_fd: int | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.terminal = terminal
        self._copy_text = copy_text
        self._run_editor = run_editor
        self._stdout_fd = stdout_fd
        self._clock = clock
        self.next_tick_at: float | None = None
        self.quit_requested = False
        self.emitted: list[str] = []

    def execute(self, command: Command) -> Event | None:
        if isinstance(command, ScheduleTickCommand):
            self.next_tick_at = self._clock() + command.delay
            return None
        if isinstance(command, QuitCommand):
            self.quit_requested = True
            return None
        if isinstance(command, CopyToClipboardCommand):
            try:
                self._copy_text(command.text)
            except ClipboardUnavailable as exc:
                logger.warning("clipboard copy failed: %s", exc)
                return ClipboardResultEvent(text=command.text, copied=False)
            return ClipboardResultEvent(text=command.text, copied=True)
        if isinstance(command, EmitStdoutCommand):
            self.emit_stdout(command.text)
            return None
        if isinstance(command, LaunchEditorCommand):
            return self.open_editor(command.program, command.path)
        raise TypeError(f"unsupported command: {command!r}")

    def emit_stdout(self, text: str) -> None:
        """Write ``text`` to stdout now and remember it for the post-session echo."""
        fd = self._stdout_fd if self._stdout_fd is not None else sys.stdout.fileno()
        os.write(fd, (text + "\r\n").encode("utf-8", errors="replace"))
        self.emitted.append(text)

    def open_editor(self, program: tuple[str, ...], path: Path) -> EditorClosedEvent:
        """Suspend the TUI, block on the editor, and report its exit."""
        result = self._run_editor(
            program,
            path,
            self.terminal.disable_tui_mode,
            self.terminal.enable_tui_mode,
        )
        return EditorClosedEvent(returncode=result.returncode, error=result.error)

    def seconds_until_tick(self) -> float | None:
        if self.next_tick_at is None:
            return None
        return max(0.0, self.next_tick_at - self._clock())
