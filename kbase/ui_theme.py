"""UI theme definitions and selection helpers.

Themes are ANSI palettes handed to the renderer as plain values. Syntax
highlighting of example commands uses a separate pygments style setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    search_border: str
    search_query: str
    selected_item: str
    normal_item: str
    description: str
    status_bar: str
    status_success: str
    status_warning: str
    error_text: str
    error_border: str
    detail_border: str
    example: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    search_border="\033[38;5;240m",
    search_query="\033[38;5;252m",
    selected_item="\033[1;38;5;170m",
    normal_item="\033[38;5;252m",
    description="\033[38;5;240m",
    status_bar="\033[48;5;240;38;5;230m",
    status_success="\033[1;48;5;42;38;5;230m",
    status_warning="\033[1;48;5;208;38;5;230m",
    error_text="\033[1;38;5;196m",
    error_border="\033[38;5;196m",
    detail_border="\033[38;5;240m",
    example="\033[38;5;114m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    search_border="\033[38;5;31m",
    search_query="\033[38;5;153m",
    selected_item="\033[1;38;5;45m",
    normal_item="\033[38;5;117m",
    description="\033[2;38;5;110m",
    status_bar="\033[48;5;24;38;5;153m",
    status_success="\033[1;48;5;30;38;5;230m",
    status_warning="\033[1;48;5;166;38;5;230m",
    error_text="\033[1;38;5;203m",
    error_border="\033[38;5;203m",
    detail_border="\033[2;38;5;31m",
    example="\033[38;5;84m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    search_border="",
    search_query="",
    selected_item="",
    normal_item="",
    description="",
    status_bar="",
    status_success="",
    status_warning="",
    error_text="",
    error_border="",
    detail_border="",
    example="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def paint(theme: UITheme, sgr: str, text: str) -> str:
    """Wrap ``text`` in ``sgr`` and the theme reset, skipping empty styles."""
    if not sgr or not text:
        return text
    return f"{sgr}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "paint",
]
