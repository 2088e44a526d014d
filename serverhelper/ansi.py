"""ANSI-aware text measurement and line shaping utilities.

Clipping and padding work in terminal display columns so wide glyphs such as
the browser's folder/file icons keep panel borders aligned.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def display_width(text: str) -> int:
    """Width of ``text`` in columns, ignoring escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to at most ``max_cols`` display columns.

    ANSI escape sequences are preserved verbatim and do not count toward width.
    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    i = 0
    n = len(text)
    while i < n and col < max_cols:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                out.append(match.group(0))
                i = match.end()
                continue
        ch = text[i]
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
        i += 1

    return "".join(out)


def fit_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` columns and pad the remainder with spaces."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


def center_line(text: str, width: int) -> str:
    clipped = clip_ansi_line(text, width)
    gap = max(0, width - display_width(clipped))
    left = gap // 2
    return " " * left + clipped + " " * (gap - left)


def wrap_plain_text(text: str, width: int) -> list[str]:
    """Word-wrap unstyled ``text`` into rows of at most ``width`` columns.

    Explicit newlines are kept, blank lines survive, and words longer than
    ``width`` are hard-split.
    """
    if width <= 0:
        return []
    rows: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            rows.append("")
            continue
        current = ""
        for word in words:
            while display_width(word) > width:
                if current:
                    rows.append(current)
                    current = ""
                head = clip_ansi_line(word, width) or word[0]
                rows.append(head)
                word = word[len(head):]
            if not current:
                current = word
            elif display_width(current) + 1 + display_width(word) <= width:
                current = f"{current} {word}"
            else:
                rows.append(current)
                current = word
        if current:
            rows.append(current)
    return rows


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "display_width",
    "clip_ansi_line",
    "fit_line",
    "center_line",
    "wrap_plain_text",
]
