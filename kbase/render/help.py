"""Static key-binding hints shown by the renderer."""

from __future__ import annotations

HELP_TEXT = "Ctrl+C: Copy | E: Edit | ↑/↓ or k/j: Navigate | Esc/Ctrl+Q: Quit"
ERROR_TITLE = "⚠ Parsing Failed"
ERROR_HINT = "Press 'e' to edit config or Esc to quit"
SEARCH_PROMPT = "Search: "
CURSOR_GLYPH = "_"
SELECTED_MARKER = ">"
UNSELECTED_MARKER = " "
EXAMPLES_HEADING = "Examples:"
