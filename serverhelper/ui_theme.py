"""UI theme definitions and selection helpers.

Themes are ANSI palettes keyed by the semantic tones a ``ScreenView`` carries.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    title: str
    border: str
    footer: str
    menu_border: str
    menu_item: str
    menu_selected: str
    browser_border: str
    browser_dir: str
    browser_file: str
    browser_selected: str
    busy: str
    success: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    title="\033[1;36m",
    border="\033[2m",
    footer="\033[90m",
    menu_border="\033[34m",
    menu_item="\033[37m",
    menu_selected="\033[1;37;44m",
    browser_border="\033[35m",
    browser_dir="\033[36m",
    browser_file="\033[37m",
    browser_selected="\033[1;37;45m",
    busy="\033[33m",
    success="\033[32m",
    error="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    title="\033[1;38;5;45m",
    border="\033[2;38;5;31m",
    footer="\033[2;38;5;110m",
    menu_border="\033[38;5;39m",
    menu_item="\033[38;5;252m",
    menu_selected="\033[1;38;5;231;48;5;25m",
    browser_border="\033[38;5;73m",
    browser_dir="\033[1;38;5;45m",
    browser_file="\033[38;5;153m",
    browser_selected="\033[1;38;5;231;48;5;30m",
    busy="\033[38;5;215m",
    success="\033[38;5;84m",
    error="\033[38;5;203m",
)

# Selection stays visible without color through the ``>>`` marker.
PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    title="",
    border="",
    footer="",
    menu_border="",
    menu_item="",
    menu_selected="",
    browser_border="",
    browser_dir="",
    browser_file="",
    browser_selected="",
    busy="",
    success="",
    error="",
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


def resolve_theme(name: str | None, no_color: bool = False) -> UITheme:
    """Return the palette for ``name``; ``no_color`` always yields the plain theme."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]
