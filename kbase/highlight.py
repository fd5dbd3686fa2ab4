"""Shell syntax highlighting for command examples via pygments."""

from __future__ import annotations

from pygments import highlight as pygments_highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import BashLexer
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_LEXER = BashLexer()
_FORMATTERS: dict[str, Terminal256Formatter] = {}


def normalize_style(style: str | None) -> str:
    """Return ``style`` when pygments knows it, else the default style."""
    if style and style in set(get_all_styles()):
        return style
    return DEFAULT_STYLE


def _formatter_for_style(style: str) -> Terminal256Formatter:
    formatter = _FORMATTERS.get(style)
    if formatter is not None:
        return formatter
    try:
        formatter = Terminal256Formatter(style=style)
    except ClassNotFound:
        formatter = Terminal256Formatter(style=DEFAULT_STYLE)
    _FORMATTERS[style] = formatter
    return formatter


def highlight_shell(command: str, style: str = DEFAULT_STYLE) -> str:
    """Return ``command`` colorized as a shell line, without a trailing newline."""
    if not command:
        return command
    rendered = pygments_highlight(command, _LEXER, _formatter_for_style(normalize_style(style)))
    return rendered.rstrip("\n")
