"""Session update engine.

``SessionEngine.handle`` consumes one event, mutates ``SessionState`` and
returns at most one command for the runtime to execute. Normal mode browses
and searches; Error mode only accepts quit and edit until a reload succeeds.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from .catalog import load_commands
from .editor import resolve_editor
from .errors import CatalogLoadError
from .events import (
    ClipboardResultEvent,
    Command,
    CopyToClipboardCommand,
    EditorClosedEvent,
    EmitStdoutCommand,
    Event,
    KeyEvent,
    LaunchEditorCommand,
    QuitCommand,
    ResizeEvent,
    ScheduleTickCommand,
    TickEvent,
)
from .input.bindings import InputAction
from .model import CommandEntry
from .state import (
    CLIPBOARD_UNAVAILABLE_STATUS_SECONDS,
    COPIED_STATUS_SECONDS,
    SessionState,
    StatusKind,
    ViewMode,
    clear_status_if_expired,
    refresh_filter,
    replace_catalog,
    set_status,
)

COPIED_MESSAGE = "Copied!"
CLIPBOARD_UNAVAILABLE_MESSAGE = "Clipboard not supported"
EDITOR_FAILED_STATUS_SECONDS = 3.0

logger = logging.getLogger(__name__)


class SessionEngine:
    """Event dispatcher owning the one ``SessionState`` of a run."""

    def __init__(
        self,
        state: SessionState,
        *,
        load_catalog: Callable[[Path], list[CommandEntry]] = load_commands,
        editor: Callable[[], tuple[str, ...]] = resolve_editor,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self._load_catalog = load_catalog
        self._editor = editor
        self._clock = clock
        self.finished = False

    def initial_command(self) -> Command:
        """Command to run before the first event: start the tick chain."""
        return ScheduleTickCommand()

    def handle(self, event: Event) -> Command | None:
        if self.finished:
            return None
        if isinstance(event, KeyEvent):
            return self._handle_key(event)
        if isinstance(event, TickEvent):
            if clear_status_if_expired(self.state, event.now):
                self.state.dirty = True
            return ScheduleTickCommand()
        if isinstance(event, ResizeEvent):
            self.state.width = event.width
            self.state.height = event.height
            self.state.dirty = True
            return None
        if isinstance(event, EditorClosedEvent):
            self._reload_after_edit(event)
            return None
        if isinstance(event, ClipboardResultEvent):
            return self._handle_clipboard_result(event)
        raise TypeError(f"unsupported event: {event!r}")

    def _handle_key(self, event: KeyEvent) -> Command | None:
        action = event.action
        if action in {InputAction.QUIT, InputAction.CANCEL}:
            self.finished = True
            return QuitCommand()
        if action is InputAction.EDIT:
            return self._open_editor()
        if self.state.mode is ViewMode.ERROR:
            return None

        state = self.state
        if action is InputAction.COPY:
            selected = state.selected()
            if selected is None:
                return None
            return CopyToClipboardCommand(selected.cmd)
        if action is InputAction.UP:
            if state.cursor > 0:
                state.cursor -= 1
                state.dirty = True
        elif action is InputAction.DOWN:
            if state.cursor < len(state.filtered) - 1:
                state.cursor += 1
                state.dirty = True
        elif action is InputAction.BACKSPACE:
            if state.query:
                state.query = state.query[:-1]
                refresh_filter(state)
                state.dirty = True
        elif action is InputAction.CHAR:
            if event.char:
                state.query += event.char
                refresh_filter(state)
                state.dirty = True
        return None

    def _open_editor(self) -> Command:
        program = self._editor()
        logger.debug("opening %s in %s", self.state.catalog_path, program[0])
        return LaunchEditorCommand(program=program, path=self.state.catalog_path)

    def _handle_clipboard_result(self, event: ClipboardResultEvent) -> Command | None:
        now = self._clock()
        self.state.dirty = True
        if event.copied:
            set_status(self.state, COPIED_MESSAGE, COPIED_STATUS_SECONDS, now=now)
            return None
        logger.warning("clipboard unavailable; writing command to stdout")
        set_status(
            self.state,
            CLIPBOARD_UNAVAILABLE_MESSAGE,
            CLIPBOARD_UNAVAILABLE_STATUS_SECONDS,
            kind=StatusKind.WARNING,
            now=now,
        )
        return EmitStdoutCommand(event.text)

    def _reload_after_edit(self, event: EditorClosedEvent) -> None:
        state = self.state
        state.dirty = True
        if event.error is not None:
            set_status(
                state,
                event.error,
                EDITOR_FAILED_STATUS_SECONDS,
                kind=StatusKind.WARNING,
                now=self._clock(),
            )
        try:
            commands = self._load_catalog(state.catalog_path)
        except CatalogLoadError as exc:
            logger.warning("reload of %s failed: %s", state.catalog_path, exc.reason)
            state.mode = ViewMode.ERROR
            state.last_error = exc
            return
        logger.debug("reloaded %d commands from %s", len(commands), state.catalog_path)
        replace_catalog(state, commands)
