"""Stateful directory browser: current directory, entries, and cursor.

Every directory change rebuilds the listing from scratch.
"""

from __future__ import annotations

from pathlib import Path

from ..selection import SelectionCursor
from .fs import BACKUP_FILE_SUFFIX, list_browser_entries, parent_directory
from .types import BrowserEntry, FileEntry


class DirectoryBrowser:
    """Browse directories and pick one file of the accepted kind."""

    def __init__(self, directory: Path, suffix: str = BACKUP_FILE_SUFFIX) -> None:
        self.suffix = suffix
        self.current_dir = directory
        self.entries: list[BrowserEntry] = []
        self.cursor = SelectionCursor()
        self.load(directory)

    def load(self, directory: Path) -> None:
        """Make ``directory`` current and rebuild the listing."""
        self.current_dir = directory
        self.entries = list_browser_entries(directory, self.suffix)
        self.cursor.reset(len(self.entries))

    def select_next(self) -> None:
        self.cursor.select_next(len(self.entries))

    def select_previous(self) -> None:
        self.cursor.select_previous(len(self.entries))

    def selected_entry(self) -> BrowserEntry | None:
        index = self.cursor.selected
        if index is None or not 0 <= index < len(self.entries):
            return None
        return self.entries[index]

    def go_to_parent(self) -> bool:
        """Re-list the parent directory; returns ``False`` at a root."""
        parent = parent_directory(self.current_dir)
        if parent is None:
            return False
        self.load(parent)
        return True

    def activate_selection(self) -> Path | None:
        """Resolve the highlighted entry.

        Parent and directory rows navigate and return ``None``. A file row
        returns its path and leaves the listing untouched.
        """
        entry = self.selected_entry()
        if entry is None:
            return None
        if isinstance(entry, FileEntry):
            return entry.path
        self.load(entry.path)
        return None


__all__ = ["DirectoryBrowser"]
