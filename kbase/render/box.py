"""Rounded-border boxes drawn with box-drawing characters."""

from __future__ import annotations

from ..ansi import display_width
from ..ui_theme import UITheme, paint

TOP_LEFT, TOP_RIGHT = "╭", "╮"
BOTTOM_LEFT, BOTTOM_RIGHT = "╰", "╯"
HORIZONTAL, VERTICAL = "─", "│"


def draw_box(
    lines: list[str],
    theme: UITheme,
    border: str,
    *,
    pad_x: int = 1,
    pad_y: int = 0,
) -> list[str]:
    """Frame ``lines`` in a rounded border colored with the ``border`` SGR.

    Content may already carry ANSI styling; widths are measured without it.
    """
    inner = max((display_width(line) for line in lines), default=0)
    span = inner + 2 * pad_x
    blank = VERTICAL + " " * span + VERTICAL
    out = [paint(theme, border, TOP_LEFT + HORIZONTAL * span + TOP_RIGHT)]
    out.extend(paint(theme, border, blank) for _ in range(pad_y))
    for line in lines:
        fill = " " * (inner - display_width(line))
        out.append(
            paint(theme, border, VERTICAL)
            + " " * pad_x
            + line
            + fill
            + " " * pad_x
            + paint(theme, border, VERTICAL)
        )
    out.extend(paint(theme, border, blank) for _ in range(pad_y))
    out.append(paint(theme, border, BOTTOM_LEFT + HORIZONTAL * span + BOTTOM_RIGHT))
    return out
