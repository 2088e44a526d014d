"""Dashboard screen states.

Exactly one of these is active at a time. ``Installing`` and ``Restoring``
mark deferred blocking work that the next loop tick performs.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Menu:
    pass


@dataclass(frozen=True)
class Installing:
    item: str


@dataclass(frozen=True)
class FileBrowser:
    pass


@dataclass(frozen=True)
class Restoring:
    pass


@dataclass(frozen=True)
class Result:
    success: bool
    message: str


Screen = Menu | Installing | FileBrowser | Restoring | Result


def is_busy(screen: Screen) -> bool:
    """Return whether ``screen`` owes one blocking collaborator call."""
    return isinstance(screen, (Installing, Restoring))


__all__ = [
    "Menu",
    "Installing",
    "FileBrowser",
    "Restoring",
    "Result",
    "Screen",
    "is_busy",
]
