"""Session engine state-machine tests.

Drives ``SessionEngine`` with synthetic events and checks the resulting
state and the single command each event produces.
"""

from __future__ import annotations

import random
import unittest
from pathlib import Path

from kbase.engine import CLIPBOARD_UNAVAILABLE_MESSAGE, COPIED_MESSAGE, SessionEngine
from kbase.errors import CatalogLoadError
from kbase.events import (
    ClipboardResultEvent,
    CopyToClipboardCommand,
    EditorClosedEvent,
    EmitStdoutCommand,
    KeyEvent,
    LaunchEditorCommand,
    QuitCommand,
    ResizeEvent,
    ScheduleTickCommand,
    TickEvent,
)
from kbase.input import InputAction
from kbase.model import CommandEntry
from kbase.render import RenderOptions, render_frame
from kbase.state import StatusKind, ViewMode, new_session
from kbase.ui_theme import PLAIN_THEME

CATALOG_PATH = Path("/tmp/kbase-test/commands.yaml")

PODS = CommandEntry(cmd="kubectl get pods", desc="List all pods", tags=("k8s",))
CONTAINERS = CommandEntry(cmd="docker ps -a", desc="List all containers", tags=("docker",))
GRAPH = CommandEntry(cmd="git log --graph", desc="Show commit graph", tags=("git",))
FIND = CommandEntry(cmd="find . -type f", desc="Find files", tags=("shell",))
PROCS = CommandEntry(cmd="ps aux", desc="Search for running processes", tags=("shell",))


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def _key(action: InputAction, char: str = "") -> KeyEvent:
    return KeyEvent(action=action, char=char)


def _type(engine: SessionEngine, text: str) -> None:
    for ch in text:
        engine.handle(_key(InputAction.CHAR, ch))


def _make_engine(
    catalog: list[CommandEntry] | None = None,
    load_error: CatalogLoadError | None = None,
    loader=None,
    clock: FakeClock | None = None,
) -> SessionEngine:
    entries = [PODS, CONTAINERS, GRAPH] if catalog is None else catalog
    state = new_session(CATALOG_PATH, entries, load_error, width=100, height=30)

    def default_loader(_path: Path) -> list[CommandEntry]:
        return list(entries)

    return SessionEngine(
        state,
        load_catalog=loader if loader is not None else default_loader,
        editor=lambda: ("nano", "-w"),
        clock=clock if clock is not None else FakeClock(),
    )


class SessionStartupTests(unittest.TestCase):
    def test_empty_query_shows_whole_catalog_with_cursor_at_top(self) -> None:
        engine = _make_engine()

        self.assertEqual(engine.state.filtered, [PODS, CONTAINERS, GRAPH])
        self.assertEqual(engine.state.cursor, 0)
        self.assertEqual(engine.state.query, "")
        self.assertIs(engine.state.mode, ViewMode.NORMAL)

    def test_load_error_starts_in_error_mode_but_keeps_catalog(self) -> None:
        error = CatalogLoadError(CATALOG_PATH, "bad indentation")
        engine = _make_engine(load_error=error)

        self.assertIs(engine.state.mode, ViewMode.ERROR)
        self.assertIs(engine.state.last_error, error)
        self.assertEqual(engine.state.catalog, [PODS, CONTAINERS, GRAPH])

    def test_initial_command_starts_tick_chain(self) -> None:
        self.assertEqual(_make_engine().initial_command(), ScheduleTickCommand(1.0))


class NormalModeKeyTests(unittest.TestCase):
    def test_typing_filters_by_description(self) -> None:
        engine = _make_engine()

        _type(engine, "pods")

        self.assertEqual(engine.state.query, "pods")
        self.assertEqual(engine.state.filtered, [PODS])

    def test_backspace_widens_filter_again(self) -> None:
        engine = _make_engine()
        _type(engine, "pods")

        engine.handle(_key(InputAction.BACKSPACE))

        self.assertEqual(engine.state.query, "pod")
        self.assertEqual(engine.state.filtered, [PODS])
        for _ in range(5):
            engine.handle(_key(InputAction.BACKSPACE))
        self.assertEqual(engine.state.query, "")
        self.assertEqual(engine.state.filtered, [PODS, CONTAINERS, GRAPH])

    def test_down_stops_at_last_entry(self) -> None:
        engine = _make_engine()
        engine.handle(_key(InputAction.DOWN))
        engine.handle(_key(InputAction.DOWN))
        self.assertEqual(engine.state.cursor, 2)

        engine.handle(_key(InputAction.DOWN))

        self.assertEqual(engine.state.cursor, 2)

    def test_up_stops_at_first_entry(self) -> None:
        engine = _make_engine()
        engine.handle(_key(InputAction.UP))
        self.assertEqual(engine.state.cursor, 0)

    def test_shrinking_filter_resets_cursor_to_zero(self) -> None:
        engine = _make_engine(catalog=[PODS, CONTAINERS, GRAPH, FIND, PROCS])
        for _ in range(4):
            engine.handle(_key(InputAction.DOWN))
        self.assertEqual(engine.state.cursor, 4)

        _type(engine, "list")

        self.assertEqual(engine.state.filtered, [PODS, CONTAINERS])
        self.assertEqual(engine.state.cursor, 0)

    def test_cursor_survives_filter_that_keeps_it_in_range(self) -> None:
        engine = _make_engine()
        engine.handle(_key(InputAction.DOWN))

        _type(engine, "l")

        self.assertEqual(engine.state.filtered, [PODS, CONTAINERS, GRAPH])
        self.assertEqual(engine.state.cursor, 1)

    def test_no_matches_leaves_cursor_at_zero(self) -> None:
        engine = _make_engine()
        engine.handle(_key(InputAction.DOWN))
        _type(engine, "zzz")

        self.assertEqual(engine.state.filtered, [])
        self.assertEqual(engine.state.cursor, 0)
        engine.handle(_key(InputAction.DOWN))
        self.assertEqual(engine.state.cursor, 0)

    def test_both_quit_bindings_end_the_session(self) -> None:
        for action in (InputAction.QUIT, InputAction.CANCEL):
            engine = _make_engine()
            self.assertEqual(engine.handle(_key(action)), QuitCommand())
            self.assertTrue(engine.finished)
            self.assertIsNone(engine.handle(_key(InputAction.CHAR, "x")))
            self.assertEqual(engine.state.query, "")

    def test_edit_requests_editor_on_catalog_path(self) -> None:
        engine = _make_engine()
        self.assertEqual(
            engine.handle(_key(InputAction.EDIT)),
            LaunchEditorCommand(program=("nano", "-w"), path=CATALOG_PATH),
        )

    def test_resize_only_updates_dimensions(self) -> None:
        engine = _make_engine()
        _type(engine, "git")

        self.assertIsNone(engine.handle(ResizeEvent(width=132, height=50)))

        self.assertEqual((engine.state.width, engine.state.height), (132, 50))
        self.assertEqual(engine.state.query, "git")
        self.assertEqual(engine.state.filtered, [GRAPH])

    def test_random_key_sequences_keep_cursor_in_bounds(self) -> None:
        rng = random.Random(7)
        actions = [InputAction.UP, InputAction.DOWN, InputAction.BACKSPACE, InputAction.CHAR]
        engine = _make_engine(catalog=[PODS, CONTAINERS, GRAPH, FIND, PROCS])
        for _ in range(500):
            action = rng.choice(actions)
            engine.handle(_key(action, rng.choice("lispogx ") if action is InputAction.CHAR else ""))
            state = engine.state
            if state.filtered:
                self.assertTrue(0 <= state.cursor < len(state.filtered))
            else:
                self.assertEqual(state.cursor, 0)


class ClipboardFlowTests(unittest.TestCase):
    def test_copy_requests_clipboard_write_of_selected_command(self) -> None:
        engine = _make_engine()
        engine.handle(_key(InputAction.DOWN))

        command = engine.handle(_key(InputAction.COPY))

        self.assertEqual(command, CopyToClipboardCommand("docker ps -a"))

    def test_copy_with_empty_view_does_nothing(self) -> None:
        engine = _make_engine()
        _type(engine, "zzz")
        self.assertIsNone(engine.handle(_key(InputAction.COPY)))

    def test_successful_copy_shows_short_status(self) -> None:
        clock = FakeClock(10.0)
        engine = _make_engine(clock=clock)

        command = engine.handle(ClipboardResultEvent(text="kubectl get pods", copied=True))

        self.assertIsNone(command)
        self.assertEqual(engine.state.status.text, COPIED_MESSAGE)
        self.assertEqual(engine.state.status.expires_at, 12.0)
        self.assertIs(engine.state.status.kind, StatusKind.SUCCESS)

    def test_failed_copy_warns_longer_and_falls_back_to_stdout(self) -> None:
        clock = FakeClock(10.0)
        engine = _make_engine(clock=clock)

        with self.assertLogs("kbase.engine", level="WARNING"):
            command = engine.handle(ClipboardResultEvent(text="kubectl get pods", copied=False))

        self.assertEqual(command, EmitStdoutCommand("kubectl get pods"))
        self.assertEqual(engine.state.status.text, CLIPBOARD_UNAVAILABLE_MESSAGE)
        self.assertEqual(engine.state.status.expires_at, 13.0)
        self.assertIs(engine.state.status.kind, StatusKind.WARNING)


class TickTests(unittest.TestCase):
    def test_tick_always_reschedules(self) -> None:
        engine = _make_engine()
        self.assertEqual(engine.handle(TickEvent(now=1.0)), ScheduleTickCommand(1.0))

    def test_expired_status_is_cleared_once_on_first_late_tick(self) -> None:
        clock = FakeClock(0.0)
        engine = _make_engine(clock=clock)
        engine.handle(ClipboardResultEvent(text="x", copied=True))
        engine.state.dirty = False

        engine.handle(TickEvent(now=1.0))
        self.assertIsNotNone(engine.state.status)
        self.assertFalse(engine.state.dirty)

        self.assertEqual(engine.handle(TickEvent(now=4.0)), ScheduleTickCommand(1.0))
        self.assertIsNone(engine.state.status)
        self.assertTrue(engine.state.dirty)

        engine.state.dirty = False
        engine.handle(TickEvent(now=5.0))
        self.assertIsNone(engine.state.status)
        self.assertFalse(engine.state.dirty)


class EditorReloadTests(unittest.TestCase):
    def test_successful_reload_replaces_catalog_and_refilters(self) -> None:
        new_catalog = [FIND, PROCS, PODS]
        engine = _make_engine(loader=lambda _path: new_catalog)
        _type(engine, "s")
        engine.handle(_key(InputAction.DOWN))
        engine.handle(_key(InputAction.DOWN))

        self.assertIsNone(engine.handle(EditorClosedEvent(returncode=0)))

        self.assertEqual(engine.state.catalog, new_catalog)
        self.assertEqual(engine.state.filtered, [FIND, PROCS, PODS])
        self.assertEqual(engine.state.cursor, 2)
        self.assertIs(engine.state.mode, ViewMode.NORMAL)

    def test_failed_reload_enters_error_mode_and_keeps_previous_view(self) -> None:
        error = CatalogLoadError(CATALOG_PATH, "mapping values are not allowed here")

        def failing_loader(_path: Path) -> list[CommandEntry]:
            raise error

        engine = _make_engine(loader=failing_loader)
        _type(engine, "list")

        with self.assertLogs("kbase.engine", level="WARNING"):
            engine.handle(EditorClosedEvent(returncode=0))

        self.assertIs(engine.state.mode, ViewMode.ERROR)
        self.assertIs(engine.state.last_error, error)
        self.assertEqual(engine.state.catalog, [PODS, CONTAINERS, GRAPH])
        self.assertEqual(engine.state.filtered, [PODS, CONTAINERS])

        frame = "\n".join(render_frame(engine.state, RenderOptions(theme=PLAIN_THEME, highlight_examples=False)))
        self.assertIn("Parsing Failed", frame)
        self.assertIn("mapping values are not allowed here", frame)
        self.assertNotIn("Search:", frame)
        self.assertNotIn("kubectl get pods", frame)

    def test_error_mode_recovers_after_successful_edit(self) -> None:
        engine = _make_engine(
            load_error=CatalogLoadError(CATALOG_PATH, "broken"),
            loader=lambda _path: [GRAPH],
        )

        self.assertIsInstance(engine.handle(_key(InputAction.EDIT)), LaunchEditorCommand)
        engine.handle(EditorClosedEvent(returncode=0))

        self.assertIs(engine.state.mode, ViewMode.NORMAL)
        self.assertIsNone(engine.state.last_error)
        self.assertEqual(engine.state.filtered, [GRAPH])

    def test_editor_launch_failure_is_reported_and_reload_still_runs(self) -> None:
        calls: list[Path] = []

        def loader(path: Path) -> list[CommandEntry]:
            calls.append(path)
            return [PODS]

        engine = _make_engine(loader=loader)
        engine.handle(EditorClosedEvent(returncode=None, error="Failed to launch editor: not found"))

        self.assertEqual(calls, [CATALOG_PATH])
        self.assertEqual(engine.state.status.text, "Failed to launch editor: not found")
        self.assertIs(engine.state.status.kind, StatusKind.WARNING)


class ErrorModeTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = _make_engine(load_error=CatalogLoadError(CATALOG_PATH, "broken"))

    def test_browsing_keys_are_ignored(self) -> None:
        for action, char in (
            (InputAction.CHAR, "x"),
            (InputAction.DOWN, ""),
            (InputAction.UP, ""),
            (InputAction.BACKSPACE, ""),
            (InputAction.COPY, ""),
        ):
            self.assertIsNone(self.engine.handle(_key(action, char)))
        self.assertEqual(self.engine.state.query, "")
        self.assertEqual(self.engine.state.cursor, 0)
        self.assertIs(self.engine.state.mode, ViewMode.ERROR)

    def test_quit_still_works(self) -> None:
        self.assertEqual(self.engine.handle(_key(InputAction.CANCEL)), QuitCommand())

    def test_edit_still_works(self) -> None:
        self.assertEqual(
            self.engine.handle(_key(InputAction.EDIT)),
            LaunchEditorCommand(program=("nano", "-w"), path=CATALOG_PATH),
        )


if __name__ == "__main__":
    unittest.main()
