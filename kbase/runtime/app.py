"""Session bootstrap: wires state, engine, terminal, and the main loop."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from ..engine import SessionEngine
from ..errors import CatalogLoadError
from ..fuzzy import filter_commands
from ..model import CommandEntry
from ..render import RenderOptions
from ..state import new_session
from .commands import CommandRunner
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def format_listing(commands: list[CommandEntry], query: str = "") -> str:
    """Render ``cmd  desc`` lines for every entry matching ``query``."""
    return "".join(f"{entry.cmd}  {entry.desc}\n" for entry in filter_commands(commands, query))


def run_session(
    catalog_path: Path,
    catalog: list[CommandEntry],
    load_error: CatalogLoadError | None,
    options: RenderOptions,
) -> list[str]:
    """Run the interactive browser and return texts echoed as clipboard fallbacks.

    The fallbacks are written to stdout while the session runs as well;
    callers print them again once the alternate screen is gone.
    """
    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    terminal = TerminalController(stdin_fd, stdout_fd)
    columns, lines = terminal.size()
    state = new_session(catalog_path, catalog, load_error, width=columns, height=lines)
    engine = SessionEngine(state)
    runner = CommandRunner(terminal, stdout_fd=stdout_fd)
    logger.debug("starting session on %s with %d commands", catalog_path, len(catalog))
    run_main_loop(engine, terminal, runner, stdin_fd, options)
    return runner.emitted


def is_interactive() -> bool:
    return os.isatty(sys.stdin.fileno()) and os.isatty(sys.stdout.fileno())
