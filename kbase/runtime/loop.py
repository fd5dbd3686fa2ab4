"""Main interactive event loop for the terminal UI.

Turns terminal input, size changes, and tick deadlines into engine events,
executes the resulting commands, and redraws whenever state is dirty.
Session logic lives in the engine; this module only wires it to the terminal.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

from ..engine import SessionEngine
from ..events import Command, Event, KeyEvent, ResizeEvent, TickEvent
from ..input import KeyBindings, default_key_bindings, read_key
from ..render import RenderOptions, render_frame, write_frame
from .commands import CommandRunner
from .terminal import TerminalController


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    idle_poll_ms: int = 120


def process_event(engine: SessionEngine, runner: CommandRunner, event: Event) -> None:
    """Feed one event to the engine and run the command chain it triggers."""
    command: Command | None = engine.handle(event)
    while command is not None:
        follow_up = runner.execute(command)
        command = engine.handle(follow_up) if follow_up is not None else None


def run_main_loop(
    engine: SessionEngine,
    terminal: TerminalController,
    runner: CommandRunner,
    stdin_fd: int,
    options: RenderOptions,
    timing: RuntimeLoopTiming | None = None,
    bindings: KeyBindings | None = None,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """Run the session until the engine emits a quit command.

    Each iteration reports terminal resizes, fires a due tick, renders a dirty
    frame, and then waits for one key no longer than the next tick deadline.
    """
    state = engine.state
    loop_timing = timing if timing is not None else RuntimeLoopTiming()
    key_bindings = bindings if bindings is not None else default_key_bindings()

    with terminal.raw_mode():
        initial = engine.initial_command()
        if initial is not None:
            runner.execute(initial)
        while not runner.quit_requested:
            columns, lines = terminal.size()
            if (columns, lines) != (state.width, state.height):
                process_event(engine, runner, ResizeEvent(width=columns, height=lines))

            due_in = runner.seconds_until_tick()
            if due_in is not None and due_in <= 0:
                runner.next_tick_at = None
                process_event(engine, runner, TickEvent(now=clock()))

            if state.dirty:
                write_frame(render_frame(state, options), state.width, state.height)
                state.dirty = False

            timeout_ms = loop_timing.idle_poll_ms
            due_in = runner.seconds_until_tick()
            if due_in is not None:
                timeout_ms = min(timeout_ms, int(due_in * 1000))
            try:
                key = read_key(stdin_fd, timeout_ms=timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            resolved = key_bindings.resolve(key)
            if resolved is None:
                continue
            action, char = resolved
            process_event(engine, runner, KeyEvent(action=action, char=char))
