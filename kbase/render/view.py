"""Frame composition for the command browser.

Builds the full screen as plain strings from ``SessionState`` and a
``RenderOptions`` value; nothing here mutates state or reads globals.
``write_frame`` is the only function that touches the terminal.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from ..ansi import clip_ansi_line
from ..highlight import DEFAULT_STYLE, highlight_shell
from ..model import CommandEntry
from ..state import SessionState, StatusKind, ViewMode
from ..ui_theme import DEFAULT_THEME, UITheme, paint
from .box import draw_box
from .help import (
    CURSOR_GLYPH,
    ERROR_HINT,
    ERROR_TITLE,
    EXAMPLES_HEADING,
    HELP_TEXT,
    SEARCH_PROMPT,
    SELECTED_MARKER,
    UNSELECTED_MARKER,
)
from .window import DESCRIPTION_LIMIT, ELLIPSIS, truncate_description, visible_range


@dataclass(frozen=True)
class RenderOptions:
    theme: UITheme = DEFAULT_THEME
    style: str = DEFAULT_STYLE
    highlight_examples: bool = True


def render_error_view(state: SessionState, options: RenderOptions) -> list[str]:
    theme = options.theme
    error_lines = str(state.last_error).splitlines() or [""]
    content = [ERROR_TITLE, "", *error_lines, "", ERROR_HINT]
    styled = [paint(theme, theme.error_text, line) for line in content]
    return ["", *draw_box(styled, theme, theme.error_border, pad_x=2, pad_y=1), ""]


def _first_line(text: str) -> str:
    lines = text.splitlines()
    return lines[0] if lines else ""


def render_list_row(entry: CommandEntry, selected: bool, theme: UITheme) -> str:
    marker = SELECTED_MARKER if selected else UNSELECTED_MARKER
    style = theme.selected_item if selected else theme.normal_item
    desc = truncate_description(_first_line(entry.desc))
    head = paint(theme, style, f"{marker} {_first_line(entry.cmd)}  ")
    return head + paint(theme, theme.description, desc)


def _description_is_hidden(desc: str) -> bool:
    """Whether the list row had to cut ``desc`` short or drop later lines."""
    return len(desc) > DESCRIPTION_LIMIT or len(desc.splitlines()) > 1


def _example_lines(example: str, options: RenderOptions) -> list[str]:
    theme = options.theme
    if options.highlight_examples:
        return highlight_shell(example, options.style).splitlines() or [""]
    return [paint(theme, theme.example, line) for line in example.splitlines()] or [""]


def render_detail_panel(entry: CommandEntry, options: RenderOptions, max_rows: int | None = None) -> list[str]:
    """Return the detail box for ``entry``, or no lines when nothing is hidden.

    Examples win over the description; the description is only shown when
    the list row had to truncate it. Multi-line text gets one box row per
    line. With ``max_rows`` the box is cut to fit, ending in an ellipsis row.
    """
    theme = options.theme
    if entry.examples:
        body = [paint(theme, theme.example, EXAMPLES_HEADING)]
        for example in entry.examples:
            body.extend(_example_lines(example, options))
    elif _description_is_hidden(entry.desc):
        body = entry.desc.splitlines()
    else:
        return []
    if max_rows is not None and len(body) + 2 > max_rows:
        if max_rows < 3:
            return []
        body = [*body[: max_rows - 3], ELLIPSIS]
    return draw_box(body, theme, theme.detail_border)


def render_status_line(state: SessionState, theme: UITheme) -> str:
    if state.status is not None:
        style = theme.status_warning if state.status.kind is StatusKind.WARNING else theme.status_success
        return paint(theme, style, f" {state.status.text} ")
    return paint(theme, theme.status_bar, f" {HELP_TEXT} ")


def render_normal_view(state: SessionState, options: RenderOptions) -> list[str]:
    theme = options.theme
    query = paint(theme, theme.search_query, f"{SEARCH_PROMPT}{state.query}{CURSOR_GLYPH}")
    lines = draw_box([query], theme, theme.search_border)
    lines.append("")

    start, end = visible_range(state.cursor, state.height, len(state.filtered))
    for idx in range(start, end):
        lines.append(render_list_row(state.filtered[idx], idx == state.cursor, theme))

    selected = state.selected()
    if selected is not None:
        # Rows left after the blank separator and the blank + status footer.
        detail_rows = state.height - len(lines) - 3
        detail = render_detail_panel(selected, options, max_rows=detail_rows)
        if detail:
            lines.append("")
            lines.extend(detail)

    lines.append("")
    status = render_status_line(state, theme)
    rows = max(state.height, 1)
    if len(lines) + 1 > rows:
        # The status row stays on screen even when the list overflows.
        return [*lines[: rows - 1], status]
    lines.append(status)
    return lines


def render_frame(state: SessionState, options: RenderOptions | None = None) -> list[str]:
    """Return the screen lines for ``state``; Error mode replaces everything."""
    opts = options if options is not None else RenderOptions()
    if state.mode is ViewMode.ERROR:
        return render_error_view(state, opts)
    return render_normal_view(state, opts)


def compose_frame(lines: list[str], width: int, height: int) -> str:
    """Clip ``lines`` to the terminal and join them for a raw-mode write."""
    out: list[str] = ["\033[H\033[J"]
    visible = lines[: max(1, height)]
    for row, line in enumerate(visible):
        clipped = clip_ansi_line(line, max(1, width))
        out.append(clipped)
        if "\033" in clipped:
            out.append("\033[0m")
        if row < len(visible) - 1:
            out.append("\r\n")
    return "".join(out)


def write_frame(lines: list[str], width: int, height: int) -> None:
    os.write(sys.stdout.fileno(), compose_frame(lines, width, height).encode("utf-8", errors="replace"))
