"""Rendering engine for dashboard frames.

``build_frame`` composes a full ANSI frame from a ``ScreenView`` without side
effects; ``write_frame`` sends it to the terminal in a single write.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass

from .ansi import center_line, clip_ansi_line, display_width, fit_line, wrap_plain_text
from .ui_theme import DEFAULT_THEME, UITheme
from .view import (
    ROW_DIR,
    ROW_FILE,
    TONE_BROWSER,
    TONE_BUSY,
    TONE_ERROR,
    TONE_SUCCESS,
    ScreenView,
)

HIGHLIGHT_SYMBOL = ">> "
TITLE_ROWS = 3
FOOTER_ROWS = 3
MIN_BODY_ROWS = 3
MIN_WIDTH = 10


@dataclass(frozen=True)
class FrameSize:
    columns: int
    lines: int


def list_window_start(selected: int | None, count: int, visible_rows: int) -> int:
    """First list index to draw so ``selected`` stays on screen."""
    if selected is None or visible_rows <= 0 or count <= visible_rows:
        return 0
    if selected < visible_rows:
        return 0
    return min(selected - visible_rows + 1, count - visible_rows)


def _box(
    inner_rows: list[str],
    width: int,
    border: str,
    reset: str,
    title: str = "",
) -> list[str]:
    inner_width = width - 2
    top_label = clip_ansi_line(f" {title} ", inner_width) if title else ""
    top_fill = "─" * max(0, inner_width - display_width(top_label))
    lines = [f"{border}┌{top_label}{top_fill}┐{reset}"]
    for row in inner_rows:
        lines.append(f"{border}│{reset}{row}{reset}{border}│{reset}")
    lines.append(f"{border}└{'─' * inner_width}┘{reset}")
    return lines


def _tone_styles(view: ScreenView, theme: UITheme) -> tuple[str, str]:
    """Return ``(border_style, text_style)`` for the body panel."""
    if view.tone == TONE_SUCCESS:
        return theme.success, theme.success
    if view.tone == TONE_ERROR:
        return theme.error, theme.error
    if view.tone == TONE_BUSY:
        return theme.busy, theme.busy
    if view.tone == TONE_BROWSER:
        return theme.browser_border, theme.browser_file
    return theme.menu_border, theme.menu_item


def _list_rows(view: ScreenView, inner_width: int, visible_rows: int, theme: UITheme) -> list[str]:
    selected_style = theme.browser_selected if view.tone == TONE_BROWSER else theme.menu_selected
    start = list_window_start(view.selected, len(view.rows), visible_rows)
    out: list[str] = []
    for index in range(start, min(len(view.rows), start + visible_rows)):
        row = view.rows[index]
        if index == view.selected:
            out.append(f"{selected_style}{fit_line(HIGHLIGHT_SYMBOL + row.text, inner_width)}{theme.reset}")
            continue
        if row.kind == ROW_DIR:
            style = theme.browser_dir
        elif row.kind == ROW_FILE:
            style = theme.browser_file
        else:
            style = theme.menu_item
        out.append(f"{style}{fit_line(' ' * len(HIGHLIGHT_SYMBOL) + row.text, inner_width)}{theme.reset}")
    return out


def build_frame(view: ScreenView, size: FrameSize, theme: UITheme = DEFAULT_THEME) -> str:
    """Compose title, body and footer panels into one ANSI frame."""
    width = max(MIN_WIDTH, size.columns)
    inner_width = width - 2
    body_rows = max(MIN_BODY_ROWS, size.lines - TITLE_ROWS - FOOTER_ROWS)
    visible_rows = body_rows - 2
    border_style, text_style = _tone_styles(view, theme)

    lines: list[str] = []
    lines.extend(
        _box([f"{theme.title}{center_line(view.title, inner_width)}"], width, theme.border, theme.reset)
    )

    if view.is_list:
        body = _list_rows(view, inner_width, visible_rows, theme)
    else:
        wrapped = wrap_plain_text(view.text or "", inner_width)[:visible_rows]
        body = [f"{text_style}{fit_line(row, inner_width)}" for row in wrapped]
    while len(body) < visible_rows:
        body.append(" " * inner_width)
    lines.extend(_box(body, width, border_style, theme.reset, title=view.panel_title))

    lines.extend(
        _box([f"{theme.footer}{center_line(view.footer, inner_width)}"], width, theme.border, theme.reset)
    )
    return "\033[H\033[J" + "\r\n".join(lines)


def write_frame(frame: str) -> None:
    os.write(sys.stdout.fileno(), frame.encode("utf-8", errors="replace"))


__all__ = [
    "FrameSize",
    "list_window_start",
    "build_frame",
    "write_frame",
]
