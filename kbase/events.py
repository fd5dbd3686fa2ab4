"""Events consumed by the session engine and the commands it emits.

Events describe something that already happened (a key press, a resize, a
timer firing, a child process exiting). Commands describe a side effect the
runtime must perform on the engine's behalf; at most one per event.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .input.bindings import InputAction

TICK_INTERVAL_SECONDS = 1.0


@dataclass(frozen=True)
class KeyEvent:
    action: InputAction
    char: str = ""


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


@dataclass(frozen=True)
class TickEvent:
    now: float


@dataclass(frozen=True)
class EditorClosedEvent:
    """The external editor exited; ``error`` is set when it could not run."""

    returncode: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class ClipboardResultEvent:
    text: str
    copied: bool


Event = KeyEvent | ResizeEvent | TickEvent | EditorClosedEvent | ClipboardResultEvent


@dataclass(frozen=True)
class QuitCommand:
    pass


@dataclass(frozen=True)
class CopyToClipboardCommand:
    text: str


@dataclass(frozen=True)
class EmitStdoutCommand:
    text: str


@dataclass(frozen=True)
class LaunchEditorCommand:
    program: tuple[str, ...]
    path: Path


@dataclass(frozen=True)
class ScheduleTickCommand:
    delay: float = TICK_INTERVAL_SECONDS


Command = (
    QuitCommand
    | CopyToClipboardCommand
    | EmitStdoutCommand
    | LaunchEditorCommand
    | ScheduleTickCommand
)
