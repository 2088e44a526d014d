"""Domain datatypes for file-browser entries."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ParentEntry:
    """Synthetic ``..`` row that navigates to the parent directory."""

    path: Path

    @property
    def label(self) -> str:
        return ".."


@dataclass(frozen=True)
class DirectoryEntry:
    """Navigable subdirectory of the listed directory."""

    path: Path

    @property
    def label(self) -> str:
        return self.path.name


@dataclass(frozen=True)
class FileEntry:
    """Selectable file whose suffix matched the accepted kind."""

    path: Path

    @property
    def label(self) -> str:
        return self.path.name


BrowserEntry = ParentEntry | DirectoryEntry | FileEntry


__all__ = [
    "ParentEntry",
    "DirectoryEntry",
    "FileEntry",
    "BrowserEntry",
]
