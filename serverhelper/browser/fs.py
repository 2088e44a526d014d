"""Filesystem scanning for the backup-file browser.

Listing is best effort: unreadable directories and entries are skipped and
logged, never raised, so the caller only ever sees a shorter listing.
"""

from __future__ import annotations

import os
from pathlib import Path

from ..logging_setup import get_logger
from .types import BrowserEntry, DirectoryEntry, FileEntry, ParentEntry

BACKUP_FILE_SUFFIX = ".xml"

logger = get_logger(__name__)


def parent_directory(directory: Path) -> Path | None:
    """Return the navigable parent of ``directory`` or ``None`` at a root.

    Filesystem roots are their own parent, and bare relative names have an
    empty (``.``) parent; neither gets a parent row.
    """
    parent = directory.parent
    if parent == directory:
        return None
    if str(parent) in {"", "."}:
        return None
    return parent


def suffix_matches(path: Path, suffix: str = BACKUP_FILE_SUFFIX) -> bool:
    """Case-insensitive suffix test, so ``BACKUP.XML`` counts as ``.xml``."""
    return path.suffix.lower() == suffix.lower()


def list_browser_entries(directory: Path, suffix: str = BACKUP_FILE_SUFFIX) -> list[BrowserEntry]:
    """List ``directory`` as ``[parent] + sorted(dirs) + sorted(matching files)``.

    Directories are always included; files only when ``suffix`` matches.
    Both groups are sorted by full path independently.
    """
    entries: list[BrowserEntry] = []
    parent = parent_directory(directory)
    if parent is not None:
        entries.append(ParentEntry(path=parent))

    directories: list[Path] = []
    files: list[Path] = []
    try:
        with os.scandir(directory) as scan:
            for child in scan:
                child_path = Path(child.path)
                try:
                    is_dir = child.is_dir()
                except OSError as exc:
                    logger.debug("Skipping unreadable entry %s: %s", child_path, exc)
                    continue
                if is_dir:
                    directories.append(child_path)
                elif suffix_matches(child_path, suffix):
                    files.append(child_path)
    except OSError as exc:
        logger.debug("Cannot list %s: %s", directory, exc)

    directories.sort()
    files.sort()
    entries.extend(DirectoryEntry(path=path) for path in directories)
    entries.extend(FileEntry(path=path) for path in files)
    return entries


__all__ = [
    "BACKUP_FILE_SUFFIX",
    "parent_directory",
    "suffix_matches",
    "list_browser_entries",
]
