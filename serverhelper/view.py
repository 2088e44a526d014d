"""Pure projection from dashboard state to a screen description.

Nothing here mutates the app; the renderer turns a ``ScreenView`` into ANSI.
"""

from __future__ import annotations

from dataclasses import dataclass

from .actions import install_item_label, menu_labels
from .browser import FileEntry, ParentEntry
from .machine import ServerHelperApp
from .state import FileBrowser, Installing, Menu, Restoring, Result

APP_TITLE = "Server Helper - Winget Installer"
DIR_ICON = "📁"
FILE_ICON = "📄"

MENU_FOOTER = "↑/↓: Navigate | Enter: Select | q: Quit"
BROWSER_FOOTER = "↑/↓: Navigate | Enter: Select/Open | Backspace: Parent | Esc: Cancel"
BUSY_FOOTER = "Please wait..."
RESULT_FOOTER = "Press Enter or Esc to return to menu"

TONE_MENU = "menu"
TONE_BROWSER = "browser"
TONE_BUSY = "busy"
TONE_SUCCESS = "success"
TONE_ERROR = "error"

ROW_ITEM = "item"
ROW_DIR = "dir"
ROW_FILE = "file"


@dataclass(frozen=True)
class ViewRow:
    text: str
    kind: str = ROW_ITEM


@dataclass(frozen=True)
class ScreenView:
    """Everything one frame must show.

    List screens fill ``rows`` and ``selected``; message screens fill ``text``.
    """

    title: str
    panel_title: str
    footer: str
    tone: str
    rows: tuple[ViewRow, ...] = ()
    selected: int | None = None
    text: str | None = None

    @property
    def is_list(self) -> bool:
        return self.text is None


def installing_text(item: str) -> str:
    label = install_item_label(item)
    return f"Installing {label}... Please wait.\n\nThis may take a few minutes."


RESTORING_TEXT = "Restoring Server Roles and Features...\n\nThis may take several minutes. Please wait."


def _browser_row(entry: object) -> ViewRow:
    if isinstance(entry, ParentEntry):
        return ViewRow(f"{DIR_ICON} ..", ROW_DIR)
    if isinstance(entry, FileEntry):
        return ViewRow(f"{FILE_ICON} {entry.label}", ROW_FILE)
    return ViewRow(f"{DIR_ICON} {entry.label}", ROW_DIR)


def project_view(app: ServerHelperApp) -> ScreenView:
    """Describe the frame for the app's active screen."""
    screen = app.screen
    if isinstance(screen, Menu):
        return ScreenView(
            title=APP_TITLE,
            panel_title="Menu",
            footer=MENU_FOOTER,
            tone=TONE_MENU,
            rows=tuple(ViewRow(label) for label in menu_labels(app.menu_items)),
            selected=app.menu_cursor.selected,
        )
    if isinstance(screen, Installing):
        label = install_item_label(screen.item)
        return ScreenView(
            title=APP_TITLE,
            panel_title=f"Installing {label}",
            footer=BUSY_FOOTER,
            tone=TONE_BUSY,
            text=installing_text(screen.item),
        )
    if isinstance(screen, FileBrowser):
        browser = app.browser
        directory = browser.current_dir if browser is not None else app.backup_dir
        entries = browser.entries if browser is not None else []
        return ScreenView(
            title=APP_TITLE,
            panel_title=f"Select Backup File - {directory}",
            footer=BROWSER_FOOTER,
            tone=TONE_BROWSER,
            rows=tuple(_browser_row(entry) for entry in entries),
            selected=browser.cursor.selected if browser is not None else None,
        )
    if isinstance(screen, Restoring):
        return ScreenView(
            title=APP_TITLE,
            panel_title="Restoring Server Roles & Features",
            footer=BUSY_FOOTER,
            tone=TONE_BUSY,
            text=RESTORING_TEXT,
        )
    if isinstance(screen, Result):
        return ScreenView(
            title=APP_TITLE,
            panel_title="Success" if screen.success else "Error",
            footer=RESULT_FOOTER,
            tone=TONE_SUCCESS if screen.success else TONE_ERROR,
            text=screen.message,
        )
    raise TypeError(f"unknown screen: {screen!r}")


__all__ = [
    "APP_TITLE",
    "ScreenView",
    "ViewRow",
    "project_view",
    "installing_text",
]
