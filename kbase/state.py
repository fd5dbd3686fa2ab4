"""Mutable session state and the small helpers that keep it consistent.

``SessionState`` is the single record mutated by ``kbase.engine``.
Helpers here recompute the filtered view and enforce the cursor invariant.
"""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass
from pathlib import Path

from .errors import CatalogLoadError
from .fuzzy import filter_commands
from .model import CommandEntry

COPIED_STATUS_SECONDS = 2.0
CLIPBOARD_UNAVAILABLE_STATUS_SECONDS = 3.0


class ViewMode(enum.Enum):
    NORMAL = "normal"
    ERROR = "error"


class StatusKind(enum.Enum):
    SUCCESS = "success"
    WARNING = "warning"


@dataclass(frozen=True)
class StatusMessage:
    text: str
    expires_at: float
    kind: StatusKind = StatusKind.SUCCESS

    def expired(self, now: float) -> bool:
        return now >= self.expires_at


@dataclass
class SessionState:
    catalog_path: Path
    catalog: list[CommandEntry]
    filtered: list[CommandEntry]
    cursor: int = 0
    query: str = ""
    mode: ViewMode = ViewMode.NORMAL
    last_error: CatalogLoadError | None = None
    status: StatusMessage | None = None
    width: int = 80
    height: int = 24
    dirty: bool = True

    def selected(self) -> CommandEntry | None:
        """Return the entry under the cursor, or ``None`` for an empty view."""
        if 0 <= self.cursor < len(self.filtered):
            return self.filtered[self.cursor]
        return None


def new_session(
    catalog_path: Path,
    catalog: list[CommandEntry],
    load_error: CatalogLoadError | None = None,
    width: int = 80,
    height: int = 24,
) -> SessionState:
    """Build the initial state; a load error starts the session in Error mode.

    The catalog is stored even when ``load_error`` is set so a later reload
    can repopulate the browsing view.
    """
    state = SessionState(
        catalog_path=catalog_path,
        catalog=list(catalog),
        filtered=list(catalog),
        width=width,
        height=height,
    )
    if load_error is not None:
        state.mode = ViewMode.ERROR
        state.last_error = load_error
    return state


def clamp_cursor(state: SessionState) -> None:
    """Reset the cursor to 0 when it falls outside the filtered view."""
    if state.cursor >= len(state.filtered) or state.cursor < 0:
        state.cursor = 0


def refresh_filter(state: SessionState) -> None:
    """Recompute ``filtered`` from catalog and query, then clamp the cursor."""
    state.filtered = filter_commands(state.catalog, state.query)
    clamp_cursor(state)


def replace_catalog(state: SessionState, catalog: list[CommandEntry]) -> None:
    """Swap in a freshly loaded catalog and leave Error mode."""
    state.catalog = list(catalog)
    state.mode = ViewMode.NORMAL
    state.last_error = None
    refresh_filter(state)


def set_status(
    state: SessionState,
    text: str,
    duration: float,
    kind: StatusKind = StatusKind.SUCCESS,
    now: float | None = None,
) -> None:
    """Show a transient status message for ``duration`` seconds."""
    started = time.monotonic() if now is None else now
    state.status = StatusMessage(text=text, expires_at=started + duration, kind=kind)


def clear_status_if_expired(state: SessionState, now: float | None = None) -> bool:
    """Drop the status message once its expiry has passed.

    Returns whether anything was cleared, so repeated ticks are no-ops.
    """
    if state.status is None:
        return False
    current = time.monotonic() if now is None else now
    if not state.status.expired(current):
        return False
    state.status = None
    return True
