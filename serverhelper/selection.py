"""Wrap-around single-selection cursor shared by the menu and file browser.

This module intentionally has no UI concerns.
The list length is passed per call so the cursor never owns the items.
"""

from __future__ import annotations


class SelectionCursor:
    """Selected index over an ordered sequence, or ``None`` when empty."""

    def __init__(self, selected: int | None = None) -> None:
        self.selected = selected

    @classmethod
    def for_length(cls, length: int) -> SelectionCursor:
        """Return a cursor on index 0, or with no selection for an empty list."""
        return cls(0 if length > 0 else None)

    def reset(self, length: int) -> None:
        """Re-seat the cursor after the underlying list was rebuilt."""
        self.selected = 0 if length > 0 else None

    def select_next(self, length: int) -> None:
        """Advance by one, wrapping from the last index back to 0."""
        if length <= 0:
            self.selected = None
            return
        if self.selected is None:
            self.selected = 0
            return
        self.selected = (self.selected + 1) % length

    def select_previous(self, length: int) -> None:
        """Retreat by one, wrapping from index 0 to the last index."""
        if length <= 0:
            self.selected = None
            return
        if self.selected is None:
            self.selected = 0
            return
        self.selected = (self.selected - 1) % length

    def __repr__(self) -> str:
        return f"SelectionCursor(selected={self.selected!r})"


__all__ = ["SelectionCursor"]
