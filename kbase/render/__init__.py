"""Rendering engine for the command browser.

Turns session state into screen lines (search box, windowed list, detail
panel, status line, or the error view) and writes composed frames.
"""

from __future__ import annotations

from .box import draw_box
from .help import HELP_TEXT
from .view import (
    RenderOptions,
    compose_frame,
    render_detail_panel,
    render_error_view,
    render_frame,
    render_list_row,
    render_normal_view,
    render_status_line,
    write_frame,
)
from .window import list_height, truncate_description, visible_range

__all__ = [
    "HELP_TEXT",
    "RenderOptions",
    "compose_frame",
    "draw_box",
    "list_height",
    "render_detail_panel",
    "render_error_view",
    "render_frame",
    "render_list_row",
    "render_normal_view",
    "render_status_line",
    "truncate_description",
    "visible_range",
    "write_frame",
]
